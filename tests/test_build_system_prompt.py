from zoneinfo import ZoneInfo

from app.application.use_cases.build_system_prompt import BuildSystemPromptUseCase
from app.application.utils.booking_block import BOOKING_DELIMITER
from app.infrastructure.llm.prompts import DEFAULT_SYSTEM_PROMPT

TAIPEI = ZoneInfo("Asia/Taipei")


def _use_case(catalog, settings_store, fixed_now):
    return BuildSystemPromptUseCase(
        catalog=catalog,
        settings_store=settings_store,
        timezone=TAIPEI,
        setting_key="GEMINI_SYSTEM_PROMPT",
        now=fixed_now,
    )


def test_default_persona_when_setting_unset(catalog, settings_store, fixed_now):
    prompt = _use_case(catalog, settings_store, fixed_now).execute()
    assert prompt.startswith(DEFAULT_SYSTEM_PROMPT)


def test_stored_base_prompt_is_used(catalog, settings_store, fixed_now):
    settings_store.set_setting("GEMINI_SYSTEM_PROMPT", "你是洗車小幫手。")
    prompt = _use_case(catalog, settings_store, fixed_now).execute()
    assert prompt.startswith("你是洗車小幫手。")
    assert DEFAULT_SYSTEM_PROMPT not in prompt


def test_services_rendered_by_pricing_mode(catalog, settings_store, fixed_now):
    prompt = _use_case(catalog, settings_store, fixed_now).execute()
    assert "- 基本洗車: 小型車 $500 / 中型車 $600 / 大型車 $700" in prompt
    assert "- 頂級鍍膜: $6000" in prompt
    assert "停售服務" not in prompt


def test_only_active_stores_listed(catalog, settings_store, fixed_now):
    prompt = _use_case(catalog, settings_store, fixed_now).execute()
    assert "- 北區店 (ID: s-north, Addr: 北路1號)" in prompt
    assert "- 南區店 (ID: s-south, Addr: 南路3號)" in prompt
    assert "歇業店" not in prompt
    assert prompt.index("北區店") < prompt.index("中區店") < prompt.index("南區店")


def test_current_time_and_output_contract(catalog, settings_store, fixed_now):
    prompt = _use_case(catalog, settings_store, fixed_now).execute()
    assert "Now: 2026/10/19 14:30:00 (Asia/Taipei)" in prompt
    assert prompt.count(BOOKING_DELIMITER) >= 2
    for field in ("customer_name", "phone", "service_type", "start_time", "store_name"):
        assert f'"{field}"' in prompt
    assert "+08:00" in prompt


def test_output_is_stable_for_same_state(catalog, settings_store, fixed_now):
    uc = _use_case(catalog, settings_store, fixed_now)
    assert uc.execute() == uc.execute()
