from skyglow.server import main

raise SystemExit(main())
