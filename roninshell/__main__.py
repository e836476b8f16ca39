from roninshell.main import main

raise SystemExit(main())
