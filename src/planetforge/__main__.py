from planetforge.cli import main

raise SystemExit(main())
