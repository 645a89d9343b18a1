"""Row reader and result writer collaborators (.csv / .xlsx)."""
