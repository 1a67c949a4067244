"""CLI entry point for icon_merge package.

Usage:
    python -m icon_merge init --framework react -o src/icons.tsx
    python -m icon_merge add mdi:home lucide:arrow-left
    python -m icon_merge list --json
    python -m icon_merge remove Home
    python -m icon_merge clear
"""

from .cli import main

if __name__ == "__main__":
    main()
