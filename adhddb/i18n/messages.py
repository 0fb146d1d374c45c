"""표시용 다국어 문구

여행 상태 라벨, 추론 사유 코드 설명 등 레코드 밖에서 관리되는 문구.
"""

from .localized import LocalizedString, resolve_text

TRAVEL_STATUS_LABELS: dict[str, LocalizedString] = {
    "allowed": LocalizedString(
        en="Allowed", zh="允许", **{"zh-TW": "允許"}, ja="許可",
    ),
    "restricted": LocalizedString(
        en="Restricted", zh="受限", **{"zh-TW": "受限"}, ja="制限あり",
    ),
    "prohibited": LocalizedString(
        en="Prohibited", zh="禁止", **{"zh-TW": "禁止"}, ja="禁止",
    ),
    "requires_permit": LocalizedString(
        en="Requires Import Permit", zh="需要进口许可", **{"zh-TW": "需要進口許可"}, ja="輸入許可が必要",
    ),
}

TRAVEL_REASON_MESSAGES: dict[str, LocalizedString] = {
    "amphetamine_prohibited_cn": LocalizedString(
        en="Amphetamine-class medications are prohibited in mainland China, even with a prescription.",
        zh="苯丙胺类药物在中国大陆被禁止，即使持有处方也不例外。",
        ja="アンフェタミン系薬物は中国本土では処方箋があっても禁止されています。",
    ),
    "amphetamine_requires_permit_jp": LocalizedString(
        en="Amphetamine-class medications require an advance import permit to enter Japan.",
        zh="苯丙胺类药物入境日本需要事先取得进口许可。",
        ja="アンフェタミン系薬物を日本に持ち込むには事前の輸入許可が必要です。",
    ),
    "controlled_not_approved": LocalizedString(
        en="Controlled substance that is not approved in the destination region.",
        zh="管制药品，且在目的地区未获批准。",
        ja="規制薬物であり、渡航先の地域では承認されていません。",
    ),
    "controlled_substance": LocalizedString(
        en="Controlled substance; carry a prescription and check local quantity limits.",
        zh="管制药品；请携带处方并确认当地的携带数量限制。",
        ja="規制薬物です。処方箋を携帯し、現地の数量制限を確認してください。",
    ),
    "non_controlled": LocalizedString(
        en="Not a controlled substance; generally allowed for personal use.",
        zh="非管制药品；一般允许个人使用携带。",
        ja="規制薬物ではありません。個人使用であれば一般的に許可されます。",
    ),
}

INFERRED_NOTICE = LocalizedString(
    en="This status is inferred from general rules. Verify with official sources.",
    zh="此状态根据一般规则推断。请与官方来源核实。",
    ja="このステータスは一般的なルールから推定されています。公式情報源でご確認ください。",
)

INTERACTION_DISCLAIMER = (
    "This information is for educational purposes only and should not replace "
    "professional medical advice. Always consult a healthcare provider before "
    "making medication changes."
)


def travel_status_label(status: str, locale: str) -> str:
    """여행 상태 코드 → 로케일 라벨 (모르는 코드는 그대로)"""
    label = TRAVEL_STATUS_LABELS.get(status)
    return resolve_text(label, locale) if label else status


def travel_reason_message(reason: str | None, locale: str) -> str:
    """추론 사유 코드 → 로케일 설명 (사유 없음/모르는 코드는 "")"""
    if not reason:
        return ""
    return resolve_text(TRAVEL_REASON_MESSAGES.get(reason), locale)
