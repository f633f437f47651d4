from starrybus.cli import main

raise SystemExit(main())
