from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import SystemPromptSchema, SystemPromptUpdateSchema
from app.application.exceptions import SettingsPersistenceError
from app.application.use_cases.manage_settings import SystemPromptSettingsUseCase
from app.wiring.dependencies import get_system_prompt_settings_use_case

router = APIRouter()


@router.get("/settings/system-prompt", response_model=SystemPromptSchema)
def get_system_prompt(
    uc: SystemPromptSettingsUseCase = Depends(get_system_prompt_settings_use_case),
):
    value, is_default = uc.get()
    return SystemPromptSchema(value=value, is_default=is_default)


@router.put("/settings/system-prompt", response_model=SystemPromptSchema)
def put_system_prompt(
    req: SystemPromptUpdateSchema,
    uc: SystemPromptSettingsUseCase = Depends(get_system_prompt_settings_use_case),
):
    try:
        uc.set(req.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SettingsPersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    value, is_default = uc.get()
    return SystemPromptSchema(value=value, is_default=is_default)
