from fastapi import APIRouter, Depends

from edge_api.routers.deps import require_admin
from edge_api.services.settings_service import FeatureFlagService, SettingsService

router = APIRouter(tags=["settings"])
_settings = SettingsService()
_flags = FeatureFlagService()


@router.get("/admin-settings")
def read_settings(admin: str = Depends(require_admin)):
    return _settings.get_all()


@router.post("/admin-settings")
def write_settings(payload: dict, admin: str = Depends(require_admin)):
    updated = _settings.update(payload, actor=admin)
    return {"success": True, "updated": updated}


@router.get("/admin-feature-flags")
def read_feature_flags(admin: str = Depends(require_admin)):
    return _flags.list_flags()


@router.post("/admin-feature-flags")
def write_feature_flag(payload: dict, admin: str = Depends(require_admin)):
    flag = _flags.set_flag(payload.get("feature_name"), payload.get("enabled"), actor=admin)
    return {"success": True, "flag": flag}
