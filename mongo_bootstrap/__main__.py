from mongo_bootstrap.main import main

raise SystemExit(main())
