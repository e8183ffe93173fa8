from healthcore.cli import main

main()
