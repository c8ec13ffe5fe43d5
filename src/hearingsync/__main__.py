from hearingsync.cli import main

main()
