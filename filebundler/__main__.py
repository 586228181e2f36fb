from filebundler.cli import main

main()
