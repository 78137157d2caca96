from mpags_cipher.main import run

run()
