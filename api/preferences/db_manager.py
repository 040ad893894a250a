# api/preferences/db_manager.py
"""
Per-operator display preferences.
"""
from core.gateway import TableGateway, eq


async def get_dark_mode(gw: TableGateway, username: str) -> bool:
    """Stored theme preference; operators without a row get the light theme."""
    rows, _ = await gw.select([eq("username", username)])
    return bool(rows and rows[0].dark_mode)


async def set_dark_mode(gw: TableGateway, username: str, dark_mode: bool) -> bool:
    """Create or update the operator's preference row."""
    rows = await gw.update([eq("username", username)], {"dark_mode": dark_mode})
    if not rows:
        await gw.insert({"username": username, "dark_mode": dark_mode})
    return dark_mode
