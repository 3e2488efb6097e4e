from reroute.cli import main

main()
