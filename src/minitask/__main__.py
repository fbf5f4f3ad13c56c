from minitask.cli import cli

cli()
