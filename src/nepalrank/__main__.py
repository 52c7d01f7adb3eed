from nepalrank.cli import main

main()
