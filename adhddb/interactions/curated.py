"""큐레이션된 약물군 상호작용 (기전, 영향, 권고, 근거 수준)

DailyMed 라벨과 임상 지침 기준으로 정리한 고정 데이터.
흥분제 공통 항목 + 약물별 항목으로 구성되며, 약물 레코드의
drugInteractions 보강(fetch_interactions)과 OpenFDA 상호작용 조회 API가 사용한다.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from adhddb.i18n.localized import DEFAULT_LOCALE, LocalizedString, resolve_optional, resolve_text
from adhddb.models import DrugClass, DrugRecord, Severity

from .catalog import CLASS_INTERACTIONS, nutrient_warnings_for

DATA_SOURCES = (
    "DrugBank Open Data",
    "FDA DailyMed Drug Labels",
    "Clinical Pharmacology Guidelines",
)

DAILYMED_URL = "https://dailymed.nlm.nih.gov/"


class EvidenceLevel(str, Enum):
    """근거 수준"""
    ESTABLISHED = "established"
    PROBABLE = "probable"
    POSSIBLE = "possible"
    THEORETICAL = "theoretical"


def _ls(en: str, zh: str, ja: str, zh_tw: str) -> LocalizedString:
    return LocalizedString(en=en, zh=zh, ja=ja, zh_tw=zh_tw)


@dataclass(frozen=True)
class CuratedInteraction:
    """약물군 단위 상호작용 1건"""
    substance: LocalizedString
    severity: Severity
    effect: LocalizedString
    class_code: Optional[str] = None            # CLASS_INTERACTIONS 키 (MAOI, CYP2D6, ...)
    examples: tuple[str, ...] = ()
    substance_type: str = "drug_class"
    mechanism: Optional[LocalizedString] = None
    clinical_significance: Optional[LocalizedString] = None
    recommendation: Optional[LocalizedString] = None
    evidence_level: EvidenceLevel = EvidenceLevel.ESTABLISHED
    source_name: Optional[str] = None

    def matches(self, query: str) -> bool:
        """상대 물질명, 약물군 코드, 예시 약물 중 하나라도 부분일치"""
        needle = query.strip().lower()
        if not needle:
            return False
        haystack = [self.substance.en or "", self.class_code or "", *self.examples]
        return any(needle in item.lower() for item in haystack)

    def to_record(self) -> dict[str, Any]:
        """YAML 기록용 (다국어 필드 유지, drugInteractions 항목과 호환)"""
        data: dict[str, Any] = {
            "drug": _dump(self.substance),
            "substanceType": self.substance_type,
            "severity": self.severity.value,
            "effect": _dump(self.effect),
            "evidenceLevel": self.evidence_level.value,
        }
        if self.mechanism:
            data["mechanism"] = _dump(self.mechanism)
        if self.clinical_significance:
            data["clinicalSignificance"] = _dump(self.clinical_significance)
        if self.recommendation:
            data["recommendation"] = _dump(self.recommendation)
        if self.source_name:
            data["sources"] = [{"name": self.source_name, "url": DAILYMED_URL}]
        return data

    def localize(self, locale: str = DEFAULT_LOCALE) -> dict[str, Any]:
        """API 응답용 (로케일 해석)"""
        data = {
            "drug": resolve_text(self.substance, locale),
            "drugClass": self.class_code,
            "examples": list(self.examples),
            "severity": self.severity.value,
            "effect": resolve_text(self.effect, locale),
            "mechanism": resolve_optional(self.mechanism, locale),
            "recommendation": resolve_optional(self.recommendation, locale),
            "evidenceLevel": self.evidence_level.value,
            "source": "curated",
        }
        return {k: v for k, v in data.items() if v not in (None, [])}


def _dump(value: LocalizedString) -> dict[str, str]:
    return value.model_dump(by_alias=True, exclude_none=True)


_MAOI = _ls("MAO Inhibitors", "单胺氧化酶抑制剂", "MAO阻害薬", "單胺氧化酶抑制劑")
_MAOI_EXAMPLES = ("phenelzine", "tranylcypromine", "selegiline", "rasagiline", "isocarboxazid")


# 흥분제 공통 (methylphenidate, amphetamine, lisdexamfetamine)
_STIMULANT = (
    CuratedInteraction(
        substance=_MAOI,
        class_code="MAOI",
        examples=_MAOI_EXAMPLES,
        severity=Severity.MAJOR,
        mechanism=_ls(
            "MAOIs prevent breakdown of monoamines. Combined with stimulants, can cause "
            "dangerous accumulation of norepinephrine and dopamine.",
            "MAOIs阻止单胺分解。与兴奋剂合用可导致去甲肾上腺素和多巴胺危险性蓄积。",
            "MAOIはモノアミンの分解を阻害。刺激薬との併用でノルエピネフリンとドパミンの危険な蓄積を引き起こす可能性。",
            "MAOIs阻止單胺分解。與興奮劑合用可導致去甲腎上腺素和多巴胺危險性蓄積。",
        ),
        effect=_ls(
            "Risk of hypertensive crisis, hyperthermia, seizures, and death",
            "高血压危象、高热、癫痫发作甚至死亡风险",
            "高血圧クリーゼ、高体温、けいれん、死亡のリスク",
            "高血壓危象、高熱、癲癇發作甚至死亡風險",
        ),
        clinical_significance=_ls(
            "Absolutely contraindicated. Do not use within 14 days of MAOI.",
            "绝对禁忌。停用MAOI后14天内禁用。",
            "絶対禁忌。MAOI中止後14日以内は使用禁止。",
            "絕對禁忌。停用MAOI後14天內禁用。",
        ),
        recommendation=_ls(
            "Never combine. Wait at least 14 days after stopping MAOI before starting stimulant.",
            "禁止合用。停用MAOI后至少等待14天再开始使用兴奋剂。",
            "併用禁止。MAOI中止後、少なくとも14日間待ってから刺激薬を開始。",
            "禁止合用。停用MAOI後至少等待14天再開始使用興奮劑。",
        ),
        source_name="DailyMed FDA Labels",
    ),
    CuratedInteraction(
        substance=_ls("Serotonergic Drugs", "血清素能药物", "セロトニン作動薬", "血清素能藥物"),
        class_code="SSRI",
        examples=("sertraline", "fluoxetine", "escitalopram", "venlafaxine", "duloxetine", "triptans"),
        severity=Severity.MODERATE,
        mechanism=_ls(
            "Stimulants may increase serotonin release. Combined with SSRIs/SNRIs increases "
            "serotonin syndrome risk.",
            "兴奋剂可能增加血清素释放。与SSRIs/SNRIs合用增加血清素综合征风险。",
            "刺激薬がセロトニン放出を増加させる可能性。SSRI/SNRIとの併用でセロトニン症候群リスクが増加。",
            "興奮劑可能增加血清素釋放。與SSRIs/SNRIs合用增加血清素症候群風險。",
        ),
        effect=_ls(
            "Serotonin syndrome: agitation, hyperthermia, tachycardia, hypertension",
            "血清素综合征：躁动、高热、心动过速、高血压",
            "セロトニン症候群：興奮、高体温、頻脈、高血圧",
            "血清素症候群：躁動、高熱、心動過速、高血壓",
        ),
        recommendation=_ls(
            "Use with caution. Monitor for serotonin syndrome symptoms. Consider lower doses.",
            "谨慎使用。监测血清素综合征症状。考虑降低剂量。",
            "慎重に使用。セロトニン症候群の症状を監視。低用量を検討。",
            "謹慎使用。監測血清素症候群症狀。考慮降低劑量。",
        ),
    ),
    CuratedInteraction(
        substance=_ls("Antihypertensive Agents", "降压药", "降圧薬", "降壓藥"),
        severity=Severity.MODERATE,
        mechanism=_ls(
            "Stimulants may counteract antihypertensive effects through sympathomimetic activity.",
            "兴奋剂可能通过拟交感神经活性抵消降压作用。",
            "刺激薬が交感神経様作用により降圧効果を打ち消す可能性。",
            "興奮劑可能通過擬交感神經活性抵消降壓作用。",
        ),
        effect=_ls(
            "Reduced antihypertensive efficacy, blood pressure elevation",
            "降压效果降低，血压升高",
            "降圧効果の減弱、血圧上昇",
            "降壓效果降低，血壓升高",
        ),
        recommendation=_ls(
            "Monitor blood pressure regularly. May need to adjust antihypertensive doses.",
            "定期监测血压。可能需要调整降压药剂量。",
            "血圧を定期的に監視。降圧薬の用量調整が必要な場合がある。",
            "定期監測血壓。可能需要調整降壓藥劑量。",
        ),
    ),
    CuratedInteraction(
        substance=_ls("Proton Pump Inhibitors (PPIs)", "质子泵抑制剂", "プロトンポンプ阻害薬", "質子泵抑制劑"),
        examples=("omeprazole", "esomeprazole", "pantoprazole"),
        severity=Severity.MODERATE,
        mechanism=_ls(
            "PPIs increase gastric pH, which may increase amphetamine absorption.",
            "PPIs升高胃pH值，可能增加安非他命吸收。",
            "PPIが胃内pHを上昇させ、アンフェタミンの吸収を増加させる可能性。",
            "PPIs升高胃pH值，可能增加安非他命吸收。",
        ),
        effect=_ls(
            "Potentially increased amphetamine effects and side effects",
            "可能增加安非他命作用和副作用",
            "アンフェタミンの効果と副作用が増加する可能性",
            "可能增加安非他命作用和副作用",
        ),
        recommendation=_ls(
            "Monitor for enhanced stimulant effects. Consider dose adjustment if needed.",
            "监测兴奋剂效果增强。必要时考虑调整剂量。",
            "刺激薬効果の増強を監視。必要に応じて用量調整を検討。",
            "監測興奮劑效果增強。必要時考慮調整劑量。",
        ),
        evidence_level=EvidenceLevel.PROBABLE,
    ),
)

_ATOMOXETINE = (
    CuratedInteraction(
        substance=_ls("CYP2D6 Inhibitors", "CYP2D6抑制剂", "CYP2D6阻害薬", "CYP2D6抑制劑"),
        class_code="CYP2D6",
        examples=("fluoxetine", "paroxetine", "quinidine", "bupropion"),
        severity=Severity.MAJOR,
        mechanism=_ls(
            "Atomoxetine is metabolized by CYP2D6. Strong inhibitors significantly increase "
            "atomoxetine levels.",
            "阿托莫西汀由CYP2D6代谢。强效抑制剂显著增加阿托莫西汀水平。",
            "アトモキセチンはCYP2D6で代謝される。強力な阻害薬がアトモキセチン濃度を著しく上昇させる。",
            "阿托莫西汀由CYP2D6代謝。強效抑制劑顯著增加阿托莫西汀水平。",
        ),
        effect=_ls(
            "Up to 6-10 fold increase in atomoxetine exposure. Increased cardiovascular effects.",
            "阿托莫西汀暴露量增加6-10倍。心血管作用增强。",
            "アトモキセチン曝露量が6〜10倍に増加。心血管への影響が増強。",
            "阿托莫西汀暴露量增加6-10倍。心血管作用增強。",
        ),
        recommendation=_ls(
            "Start with lower atomoxetine dose. Examples: fluoxetine, paroxetine, quinidine, bupropion.",
            "从较低剂量开始。例如：氟西汀、帕罗西汀、奎尼丁、安非他酮。",
            "低用量から開始。例：フルオキセチン、パロキセチン、キニジン、ブプロピオン。",
            "從較低劑量開始。例如：氟西汀、帕羅西汀、奎尼丁、安非他酮。",
        ),
        source_name="Strattera FDA Label",
    ),
    CuratedInteraction(
        substance=_MAOI,
        class_code="MAOI",
        examples=_MAOI_EXAMPLES,
        severity=Severity.MAJOR,
        mechanism=_ls(
            "Atomoxetine is a norepinephrine reuptake inhibitor. Combined with MAOIs risks "
            "hypertensive crisis.",
            "阿托莫西汀是去甲肾上腺素再摄取抑制剂。与MAOIs合用有高血压危象风险。",
            "アトモキセチンはノルエピネフリン再取り込み阻害薬。MAOIとの併用で高血圧クリーゼのリスク。",
            "阿托莫西汀是去甲腎上腺素再攝取抑制劑。與MAOIs合用有高血壓危象風險。",
        ),
        effect=_ls("Risk of hypertensive crisis", "高血压危象风险", "高血圧クリーゼのリスク", "高血壓危象風險"),
        recommendation=_ls(
            "Contraindicated. Wait at least 14 days after stopping MAOI.",
            "禁忌。停用MAOI后至少等待14天。",
            "禁忌。MAOI中止後、少なくとも14日間待つ。",
            "禁忌。停用MAOI後至少等待14天。",
        ),
    ),
)

_GUANFACINE = (
    CuratedInteraction(
        substance=_ls("CYP3A4 Inhibitors", "CYP3A4抑制剂", "CYP3A4阻害薬", "CYP3A4抑制劑"),
        class_code="CYP3A4",
        examples=("ketoconazole", "ritonavir", "clarithromycin"),
        severity=Severity.MAJOR,
        mechanism=_ls(
            "Guanfacine is metabolized by CYP3A4. Inhibitors increase guanfacine plasma levels.",
            "胍法辛由CYP3A4代谢。抑制剂增加胍法辛血浆浓度。",
            "グアンファシンはCYP3A4で代謝される。阻害薬がグアンファシン血漿濃度を上昇させる。",
            "胍法辛由CYP3A4代謝。抑制劑增加胍法辛血漿濃度。",
        ),
        effect=_ls(
            "Increased sedation, hypotension, and bradycardia",
            "镇静、低血压和心动过缓加重",
            "鎮静、低血圧、徐脈の増強",
            "鎮靜、低血壓和心動過緩加重",
        ),
        recommendation=_ls(
            "Reduce guanfacine dose by 50% when using strong CYP3A4 inhibitors. "
            "Examples: ketoconazole, ritonavir.",
            "使用强效CYP3A4抑制剂时将胍法辛剂量减半。例如：酮康唑、利托那韦。",
            "強力なCYP3A4阻害薬使用時はグアンファシン用量を50%減量。例：ケトコナゾール、リトナビル。",
            "使用強效CYP3A4抑制劑時將胍法辛劑量減半。例如：酮康唑、利托那韋。",
        ),
        source_name="Intuniv FDA Label",
    ),
    CuratedInteraction(
        substance=_ls("CYP3A4 Inducers", "CYP3A4诱导剂", "CYP3A4誘導薬", "CYP3A4誘導劑"),
        class_code="CYP3A4",
        examples=("rifampin", "carbamazepine", "phenytoin"),
        severity=Severity.MODERATE,
        mechanism=_ls(
            "CYP3A4 inducers increase guanfacine metabolism, reducing efficacy.",
            "CYP3A4诱导剂加速胍法辛代谢，降低疗效。",
            "CYP3A4誘導薬がグアンファシン代謝を促進し、効果を減弱させる。",
            "CYP3A4誘導劑加速胍法辛代謝，降低療效。",
        ),
        effect=_ls("Reduced guanfacine efficacy", "胍法辛疗效降低", "グアンファシンの効果減弱", "胍法辛療效降低"),
        recommendation=_ls(
            "Consider increasing guanfacine dose up to double. "
            "Examples: rifampin, carbamazepine, phenytoin.",
            "考虑将胍法辛剂量增加至双倍。例如：利福平、卡马西平、苯妥英。",
            "グアンファシン用量を最大2倍に増量を検討。例：リファンピン、カルバマゼピン、フェニトイン。",
            "考慮將胍法辛劑量增加至雙倍。例如：利福平、卡馬西平、苯妥英。",
        ),
    ),
    CuratedInteraction(
        substance=_ls("CNS Depressants", "中枢神经抑制剂", "中枢神経抑制薬", "中樞神經抑制劑"),
        examples=("alcohol", "benzodiazepines", "opioids"),
        severity=Severity.MODERATE,
        mechanism=_ls(
            "Additive sedative effects with guanfacine.",
            "与胍法辛有叠加的镇静作用。",
            "グアンファシンとの鎮静作用の相加。",
            "與胍法辛有疊加的鎮靜作用。",
        ),
        effect=_ls(
            "Increased sedation and CNS depression",
            "镇静和中枢抑制加重",
            "鎮静と中枢抑制の増強",
            "鎮靜和中樞抑制加重",
        ),
        recommendation=_ls(
            "Use caution when combining with alcohol, benzodiazepines, or other sedatives.",
            "与酒精、苯二氮卓类或其他镇静剂合用时需谨慎。",
            "アルコール、ベンゾジアゼピン系、その他の鎮静薬との併用は慎重に。",
            "與酒精、苯二氮卓類或其他鎮靜劑合用時需謹慎。",
        ),
    ),
)

_CLONIDINE = (
    CuratedInteraction(
        substance=_ls("Beta-Blockers", "β受体阻滞剂", "β遮断薬", "β受體阻滯劑"),
        class_code="beta-blocker",
        examples=("propranolol", "metoprolol", "atenolol"),
        severity=Severity.MAJOR,
        mechanism=_ls(
            "Stopping clonidine while on beta-blockers can cause severe rebound hypertension.",
            "服用β受体阻滞剂期间停用可乐定可导致严重反跳性高血压。",
            "β遮断薬使用中にクロニジンを中止すると、重度のリバウンド高血圧を引き起こす可能性。",
            "服用β受體阻滯劑期間停用可樂定可導致嚴重反跳性高血壓。",
        ),
        effect=_ls(
            "Rebound hypertensive crisis upon clonidine discontinuation",
            "停用可乐定时反跳性高血压危象",
            "クロニジン中止時のリバウンド高血圧クリーゼ",
            "停用可樂定時反跳性高血壓危象",
        ),
        recommendation=_ls(
            "If stopping clonidine, discontinue beta-blocker first, then taper clonidine slowly "
            "over several days.",
            "如需停用可乐定，先停β受体阻滞剂，然后数天内缓慢减停可乐定。",
            "クロニジンを中止する場合、まずβ遮断薬を中止し、その後数日かけてクロニジンを漸減。",
            "如需停用可樂定，先停β受體阻滯劑，然後數天內緩慢減停可樂定。",
        ),
        source_name="Kapvay FDA Label",
    ),
    CuratedInteraction(
        substance=_ls("Tricyclic Antidepressants", "三环类抗抑郁药", "三環系抗うつ薬", "三環類抗憂鬱藥"),
        class_code="TCA",
        examples=("amitriptyline", "nortriptyline", "imipramine", "desipramine"),
        severity=Severity.MAJOR,
        mechanism=_ls(
            "TCAs block the antihypertensive effect of clonidine and may worsen rebound hypertension.",
            "TCAs阻断可乐定的降压作用，可能加重反跳性高血压。",
            "TCAがクロニジンの降圧効果を阻害し、リバウンド高血圧を悪化させる可能性。",
            "TCAs阻斷可樂定的降壓作用，可能加重反跳性高血壓。",
        ),
        effect=_ls(
            "Loss of blood pressure control, potential hypertensive crisis",
            "血压控制丧失，可能出现高血压危象",
            "血圧コントロールの喪失、高血圧クリーゼの可能性",
            "血壓控制喪失，可能出現高血壓危象",
        ),
        recommendation=_ls(
            "Avoid combination. If used together, monitor blood pressure closely.",
            "避免合用。如必须合用，密切监测血压。",
            "併用を避ける。やむを得ず併用する場合は血圧を注意深く監視。",
            "避免合用。如必須合用，密切監測血壓。",
        ),
    ),
)

_VILOXAZINE = (
    CuratedInteraction(
        substance=_ls("CYP1A2 Substrates", "CYP1A2底物", "CYP1A2基質", "CYP1A2底物"),
        class_code="CYP1A2",
        examples=("theophylline", "clozapine", "caffeine", "tizanidine"),
        severity=Severity.MAJOR,
        mechanism=_ls(
            "Viloxazine is a strong CYP1A2 inhibitor. It increases levels of CYP1A2 substrates.",
            "Viloxazine是强效CYP1A2抑制剂。可增加CYP1A2底物水平。",
            "ビロキサジンは強力なCYP1A2阻害薬。CYP1A2基質の濃度を上昇させる。",
            "Viloxazine是強效CYP1A2抑制劑。可增加CYP1A2底物水平。",
        ),
        effect=_ls(
            "Significantly increased exposure to theophylline, clozapine, and other CYP1A2 substrates",
            "显著增加茶碱、氯氮平等CYP1A2底物的暴露量",
            "テオフィリン、クロザピン等のCYP1A2基質への曝露量が著しく増加",
            "顯著增加茶鹼、氯氮平等CYP1A2底物的暴露量",
        ),
        recommendation=_ls(
            "Avoid theophylline. Reduce clozapine dose. Monitor other CYP1A2 substrates closely.",
            "避免茶碱。减少氯氮平剂量。密切监测其他CYP1A2底物。",
            "テオフィリンを避ける。クロザピンを減量。他のCYP1A2基質を注意深く監視。",
            "避免茶鹼。減少氯氮平劑量。密切監測其他CYP1A2底物。",
        ),
        source_name="Qelbree FDA Label",
    ),
    CuratedInteraction(
        substance=_MAOI,
        class_code="MAOI",
        examples=_MAOI_EXAMPLES,
        severity=Severity.MAJOR,
        mechanism=_ls(
            "Viloxazine affects norepinephrine reuptake. Combined with MAOIs may cause "
            "hypertensive crisis.",
            "Viloxazine影响去甲肾上腺素再摄取。与MAOIs合用可能导致高血压危象。",
            "ビロキサジンはノルエピネフリン再取り込みに影響。MAOIとの併用で高血圧クリーゼを引き起こす可能性。",
            "Viloxazine影響去甲腎上腺素再攝取。與MAOIs合用可能導致高血壓危象。",
        ),
        effect=_ls(
            "Risk of serotonin syndrome and hypertensive crisis",
            "血清素综合征和高血压危象风险",
            "セロトニン症候群と高血圧クリーゼのリスク",
            "血清素症候群和高血壓危象風險",
        ),
        recommendation=_ls(
            "Contraindicated within 14 days of MAOI use.",
            "禁止在MAOI使用后14天内使用。",
            "MAOI使用後14日以内は禁忌。",
            "禁止在MAOI使用後14天內使用。",
        ),
    ),
)

CURATED_INTERACTIONS: Mapping[str, tuple[CuratedInteraction, ...]] = MappingProxyType({
    "stimulant": _STIMULANT,
    "atomoxetine": _ATOMOXETINE,
    "guanfacine": _GUANFACINE,
    "clonidine": _CLONIDINE,
    "viloxazine": _VILOXAZINE,
})


def curated_interactions_for(drug: DrugRecord) -> list[CuratedInteraction]:
    """흥분제 공통 항목 + 약물별 항목 (표 순서)"""
    items: list[CuratedInteraction] = []
    if drug.drug_class == DrugClass.STIMULANT.value:
        items.extend(CURATED_INTERACTIONS["stimulant"])
    items.extend(CURATED_INTERACTIONS.get(drug.id, ()))
    return items


def build_interactions_data(drug: DrugRecord, today: Optional[date] = None) -> dict[str, Any]:
    """
    약물 1개의 상호작용 보강 데이터 (YAML 기록용)

    Returns:
        {"drugInteractions", "nutrientInteractions", "commonCoprescribed",
         "lastUpdated", "sources"}
    """
    today = today or date.today()

    nutrients = []
    for warning in nutrient_warnings_for(drug):
        item: dict[str, Any] = {
            "nutrient": _dump(warning.nutrient),
            "nutrientType": warning.nutrient_type,
            "effect": _dump(warning.effect),
            "severity": warning.severity.value,
        }
        if warning.timing:
            item["timing"] = _dump(warning.timing)
        if warning.recommendation:
            item["recommendation"] = _dump(warning.recommendation)
        nutrients.append(item)

    coprescribed = [
        {
            "drugClass": item.key,
            "drugClassLabel": item.label,
            "interactionSeverity": item.severity.value,
            "quickNote": item.note,
        }
        for item in CLASS_INTERACTIONS.values()
        if item.affects(drug.id)
    ]

    return {
        "drugInteractions": [i.to_record() for i in curated_interactions_for(drug)],
        "nutrientInteractions": nutrients,
        "commonCoprescribed": coprescribed,
        "lastUpdated": today.isoformat(),
        "sources": list(DATA_SOURCES),
    }
