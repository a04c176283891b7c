from metadata_assets.cli import main

raise SystemExit(main())
