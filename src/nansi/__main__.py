from nansi.cli import main

main()
