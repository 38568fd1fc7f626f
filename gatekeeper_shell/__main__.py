from .process_manager.__main__ import main

main()
