# Importing the package registers every model on Base.metadata
from db_models.asset import Asset, AssetStatus
from db_models.preference import UserPreference

__all__ = ["Asset", "AssetStatus", "UserPreference"]
