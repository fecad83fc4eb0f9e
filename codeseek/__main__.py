# codeseek/__main__.py
from codeseek.cli import app

if __name__ == "__main__":
    app()
