from ctxhash.cli import main

main()
