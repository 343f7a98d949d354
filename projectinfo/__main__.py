# projectinfo/__main__.py

from .projectinfo import cli

if __name__ == "__main__":
    cli(prog_name="projectinfo")
