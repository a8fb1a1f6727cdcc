"""Query an Intel AMT management engine over HECI with PTHI commands, and parse smb:// locations."""

__version__ = "0.1.0"
__all__ = ["errors", "helpers", "password", "heci", "smb", "status", "pthi_types", "pthi"]