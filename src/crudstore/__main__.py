from crudstore.cli.main import main

main()
