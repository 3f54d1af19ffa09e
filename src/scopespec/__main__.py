from scopespec.cli import main

main()
