from ghs_demangler.cli import main

main()
