from __future__ import annotations

from todocsv.cli import main

if __name__ == "__main__":
    main()
