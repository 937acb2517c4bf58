from .flick_backup import main

main()
