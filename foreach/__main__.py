from foreach.main import main

main()
