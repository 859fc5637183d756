from glyph16.cli import main

raise SystemExit(main())
