"""Allow ``python -m smaps_csv``."""

from smaps_csv.cli import main

raise SystemExit(main())
