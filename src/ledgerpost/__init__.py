"""ledgerpost - double-entry journal entries for imported bank transactions."""

__version__ = "0.1.0"


# Import main lazily to avoid circular dependencies
def __getattr__(name):
    if name == "main":
        from ledgerpost.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
