"""Flattening of processor-supplied customer addresses."""

ADDRESS_PARTS = ("line1", "line2", "city", "state", "postal_code", "country")


def format_address(address: dict | None) -> str:
    """Join the address parts with ", ", dropping missing and blank ones."""
    if not address:
        return ""
    parts = (address.get(key) for key in ADDRESS_PARTS)
    return ", ".join(str(part) for part in parts if part is not None and str(part).strip())
