from notekeeper.cli.main import main

raise SystemExit(main())
