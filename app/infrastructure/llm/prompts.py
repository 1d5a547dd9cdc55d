from app.application.utils.booking_block import BOOKING_DELIMITER

DEFAULT_SYSTEM_PROMPT = "你是一位專業的 WashCar 汽車美容服務助理。請用繁體中文回答。"


def build_services_section(lines: list[str]) -> str:
    return "\n[SERVICES]\n" + "".join(f"{line}\n" for line in lines)


def build_stores_section(lines: list[str]) -> str:
    return "\n[AVAILABLE STORES]\n" + "".join(f"{line}\n" for line in lines)


def build_booking_instruction(services_section: str, stores_section: str, now_text: str, timezone_label: str) -> str:
    return (
        f"{services_section}"
        f"{stores_section}"
        "\n"
        "[CURRENT TIME]\n"
        f"Now: {now_text} ({timezone_label})\n"
        "\n"
        "[BOOKING RULES]\n"
        "To make a booking, you MUST identify 5 fields. If any is missing, ASK the user.\n"
        "  1. Customer Name\n"
        "  2. Phone\n"
        "  3. Service Name\n"
        "  4. Time (ISO 8601 format with +08:00)\n"
        "  5. Store Name (MUST EXACTLY match one from [AVAILABLE STORES])\n"
        "\n"
        "If the user says \"nearest store\" or sends a location, ask them to confirm the store name suggested.\n"
        "\n"
        "[OUTPUT FORMAT]\n"
        "If ALL 5 fields are collected and confirmed, output ONLY this JSON block "
        f"wrapped in {BOOKING_DELIMITER}:\n"
        f"{BOOKING_DELIMITER}\n"
        "{\n"
        "  \"customer_name\": \"...\",\n"
        "  \"phone\": \"...\",\n"
        "  \"service_type\": \"...\",\n"
        "  \"start_time\": \"2024-XX-XXTHH:MM:00+08:00\",\n"
        "  \"store_name\": \"...\"\n"
        "}\n"
        f"{BOOKING_DELIMITER}\n"
        "\n"
        "Otherwise, reply naturally to help the user.\n"
    )
