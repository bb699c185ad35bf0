"""Named timezone records, the static zone catalog and the IANA-backed zone database."""
