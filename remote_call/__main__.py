from remote_call.cli import main

main()
