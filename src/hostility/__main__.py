from hostility.cli import main

raise SystemExit(main())
