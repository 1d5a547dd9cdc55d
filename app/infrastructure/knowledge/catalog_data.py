from __future__ import annotations

from app.domain.entities.service_catalog import ServiceCatalogEntry
from app.domain.entities.store import StoreRecord

# Demo catalog used when no data store is configured.
SERVICES: list[ServiceCatalogEntry] = [
    ServiceCatalogEntry(
        id=1,
        name="基本洗車",
        pricing_mode="TIERED",
        price_small="500",
        price_medium="600",
        price_large="700",
        description="泡沫清洗 + 內裝簡易吸塵",
    ),
    ServiceCatalogEntry(
        id=2,
        name="精緻美容",
        pricing_mode="TIERED",
        price_small="1500",
        price_medium="1800",
        price_large="2100",
        description="深層去汙 + 手工打蠟 + 皮革保養",
    ),
    ServiceCatalogEntry(
        id=3,
        name="頂級鍍膜",
        pricing_mode="FLAT",
        price_flat="6000",
        description="全車拋光 + 雙層鍍膜防護",
    ),
]

STORES: list[StoreRecord] = [
    StoreRecord(id="store-taipei", name="台北信義店", address="台北市信義區松仁路100號", lat=25.0330, lng=121.5654),
    StoreRecord(id="store-taichung", name="台中西屯店", address="台中市西屯區台灣大道三段99號", lat=24.1620, lng=120.6400),
    StoreRecord(id="store-kaohsiung", name="高雄左營店", address="高雄市左營區博愛二路777號", lat=22.6690, lng=120.3020),
]
