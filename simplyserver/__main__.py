from simplyserver.main import main

main()
