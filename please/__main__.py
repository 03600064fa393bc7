from please.cli.app import main

main()
