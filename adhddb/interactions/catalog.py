"""상호작용 기준표

약물군(class) 상호작용표와 영양소 경고표. 둘 다 고정 데이터이며 변경하지 않는다.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from adhddb.i18n.localized import LocalizedString
from adhddb.models import DrugClass, DrugRecord, Severity

_STIMULANTS_AND_ATOMOXETINE = (
    "methylphenidate",
    "amphetamine-mixed-salts",
    "lisdexamfetamine",
    "atomoxetine",
)


@dataclass(frozen=True)
class ClassInteraction:
    """약물군 상호작용"""
    key: str
    label: str
    severity: Severity
    affected_drugs: tuple[str, ...]
    note: str

    def affects(self, drug_id: str) -> bool:
        return drug_id in self.affected_drugs


CLASS_INTERACTIONS: Mapping[str, ClassInteraction] = MappingProxyType({
    item.key: item
    for item in (
        ClassInteraction(
            key="MAOI",
            label="MAO Inhibitors",
            severity=Severity.MAJOR,
            affected_drugs=(*_STIMULANTS_AND_ATOMOXETINE, "viloxazine"),
            note="Contraindicated. Risk of hypertensive crisis. Wait 14 days after stopping MAOI.",
        ),
        ClassInteraction(
            key="SSRI",
            label="SSRIs",
            severity=Severity.MODERATE,
            affected_drugs=_STIMULANTS_AND_ATOMOXETINE,
            note="Increased risk of serotonin syndrome. Monitor for agitation, confusion, rapid heart rate.",
        ),
        ClassInteraction(
            key="SNRI",
            label="SNRIs",
            severity=Severity.MODERATE,
            affected_drugs=_STIMULANTS_AND_ATOMOXETINE,
            note="Additive cardiovascular effects. Monitor blood pressure and heart rate.",
        ),
        ClassInteraction(
            key="TCA",
            label="Tricyclic Antidepressants",
            severity=Severity.MODERATE,
            affected_drugs=(
                "methylphenidate", "amphetamine-mixed-salts", "lisdexamfetamine", "clonidine",
            ),
            note="Stimulants may increase TCA levels. Clonidine effectiveness may be reduced.",
        ),
        ClassInteraction(
            key="beta-blocker",
            label="Beta-Blockers",
            severity=Severity.MAJOR,
            affected_drugs=("clonidine",),
            note="Risk of rebound hypertension if clonidine stopped abruptly. Taper carefully.",
        ),
        ClassInteraction(
            key="CYP2D6",
            label="CYP2D6 Inhibitors",
            severity=Severity.MAJOR,
            affected_drugs=("atomoxetine",),
            note="Up to 6-10 fold increase in atomoxetine levels. Start with lower dose.",
        ),
        ClassInteraction(
            key="CYP3A4",
            label="CYP3A4 Modulators",
            severity=Severity.MAJOR,
            affected_drugs=("guanfacine",),
            note="Inhibitors: reduce guanfacine by 50%. Inducers: may need to double dose.",
        ),
        ClassInteraction(
            key="CYP1A2",
            label="CYP1A2 Substrates",
            severity=Severity.MAJOR,
            affected_drugs=("viloxazine",),
            note="Viloxazine strongly inhibits CYP1A2. Avoid theophylline, reduce caffeine.",
        ),
    )
})


def find_class_interaction(query: str) -> Optional[ClassInteraction]:
    """
    약물군 조회

    대문자 키로 먼저 찾고, 없으면 라벨 부분일치 또는 키 대소문자 무시 일치로
    표 순서상 첫 항목을 돌려준다.
    """
    if not query:
        return None

    exact = CLASS_INTERACTIONS.get(query.upper())
    if exact is not None:
        return exact

    needle = query.lower()
    for key, item in CLASS_INTERACTIONS.items():
        if needle in item.label.lower() or key.lower() == needle:
            return item
    return None


# ──────────────────────────────────────────────
# 영양소 경고
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class NutrientWarning:
    """영양소/음식 상호작용"""
    nutrient: LocalizedString
    nutrient_type: str  # vitamin, mineral, food, supplement, beverage
    effect: LocalizedString
    severity: Severity
    applies_to: Callable[[DrugRecord], bool]
    timing: Optional[LocalizedString] = None
    recommendation: Optional[LocalizedString] = None


def _is_stimulant(drug: DrugRecord) -> bool:
    return drug.drug_class == DrugClass.STIMULANT.value


NUTRIENT_WARNINGS: tuple[NutrientWarning, ...] = (
    NutrientWarning(
        nutrient=LocalizedString(en="Vitamin C", zh="维生素C", **{"zh-TW": "維生素C"}, ja="ビタミンC"),
        nutrient_type="vitamin",
        effect=LocalizedString(
            en="Acidifies urine, increases amphetamine excretion, reduces effectiveness",
            zh="酸化尿液，增加苯丙胺排泄，降低疗效",
            ja="尿を酸性化し、アンフェタミンの排泄を増やして効果を弱める",
        ),
        severity=Severity.MODERATE,
        applies_to=_is_stimulant,
        timing=LocalizedString(en="Take 2+ hours apart", zh="间隔2小时以上服用", ja="2時間以上空けて服用"),
        recommendation=LocalizedString(
            en="Avoid large doses of citrus or vitamin C supplements near medication time",
            zh="服药前后避免大量摄入柑橘类或维生素C补充剂",
            ja="服薬時間の前後に柑橘類やビタミンCサプリを大量にとらない",
        ),
    ),
    NutrientWarning(
        nutrient=LocalizedString(en="Caffeine", zh="咖啡因", ja="カフェイン"),
        nutrient_type="beverage",
        effect=LocalizedString(
            en="Additive CNS stimulation, increased anxiety and cardiovascular effects",
            zh="叠加中枢神经兴奋，增加焦虑和心血管影响",
            ja="中枢神経刺激が重なり、不安や心血管への影響が増す",
        ),
        severity=Severity.MODERATE,
        applies_to=_is_stimulant,
        recommendation=LocalizedString(
            en="Limit caffeine intake while on stimulant medications",
            zh="服用兴奋剂类药物期间限制咖啡因摄入",
            ja="中枢刺激薬の服用中はカフェイン摂取を控える",
        ),
    ),
    NutrientWarning(
        nutrient=LocalizedString(en="Grapefruit", zh="西柚", **{"zh-TW": "葡萄柚"}, ja="グレープフルーツ"),
        nutrient_type="food",
        effect=LocalizedString(
            en="Inhibits CYP3A4, increases guanfacine levels",
            zh="抑制CYP3A4，升高胍法辛血药浓度",
            ja="CYP3A4を阻害し、グアンファシンの血中濃度を上げる",
        ),
        severity=Severity.MODERATE,
        applies_to=lambda drug: drug.id == "guanfacine",
        timing=LocalizedString(en="Avoid completely", zh="完全避免", ja="完全に避ける"),
        recommendation=LocalizedString(
            en="Avoid grapefruit products while taking guanfacine",
            zh="服用胍法辛期间避免食用西柚制品",
            ja="グアンファシン服用中はグレープフルーツ製品を避ける",
        ),
    ),
    NutrientWarning(
        nutrient=LocalizedString(en="Alcohol", zh="酒精", ja="アルコール"),
        nutrient_type="beverage",
        effect=LocalizedString(
            en="Masks stimulant intoxication, worsens ADHD symptoms, cardiovascular strain",
            zh="掩盖兴奋剂中毒症状，加重ADHD症状，增加心血管负担",
            ja="刺激薬中毒を隠し、ADHD症状を悪化させ、心血管に負担をかける",
        ),
        severity=Severity.MAJOR,
        applies_to=lambda drug: True,
        timing=LocalizedString(en="Avoid", zh="避免", ja="避ける"),
        recommendation=LocalizedString(
            en="Avoid alcohol while taking ADHD medications",
            zh="服用ADHD药物期间避免饮酒",
            ja="ADHD治療薬の服用中は飲酒を避ける",
        ),
    ),
)


def nutrient_warnings_for(drug: DrugRecord) -> list[NutrientWarning]:
    """약물에 해당하는 영양소 경고 (표 순서)"""
    return [w for w in NUTRIENT_WARNINGS if w.applies_to(drug)]
