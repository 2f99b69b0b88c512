"""Allow ``python -m taboolint``."""

from taboolint.cli import main

raise SystemExit(main())
