from autocommit.cli.main import main_cli

main_cli()
