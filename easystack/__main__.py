from easystack.pipeline import main

main()
