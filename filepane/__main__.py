from filepane.main import run

run()
