from csv_table.cli import main

main()
