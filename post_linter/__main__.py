from post_linter.cli import main

main()
