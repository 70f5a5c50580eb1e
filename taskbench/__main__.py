from taskbench.cli import main

main()
