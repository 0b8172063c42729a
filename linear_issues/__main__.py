from linear_issues.cli import cli

if __name__ == "__main__":
    cli(prog_name="linear-issues")
