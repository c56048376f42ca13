"""Command-line interface: python -m orrery"""
from orrery.main import main

if __name__ == "__main__":
    main()
