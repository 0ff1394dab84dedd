from records_service.cli import main

main()
