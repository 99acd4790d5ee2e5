from lingostage.cli import main

main()
