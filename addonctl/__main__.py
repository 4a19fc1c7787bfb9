from addonctl.cli import main

main()
