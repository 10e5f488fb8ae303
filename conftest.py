# Keeps the repository root on sys.path so tests can import the src package.
