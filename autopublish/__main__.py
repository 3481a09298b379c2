from autopublish.cli import main

main()
