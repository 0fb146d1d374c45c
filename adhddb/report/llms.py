"""llms.txt / llms-full.txt 텍스트 내보내기

llms.txt는 로케일별 개요, llms-full.txt는 영문 전체 덤프.
"""

from datetime import datetime
from typing import Optional

from adhddb.config import settings
from adhddb.i18n.localized import DEFAULT_LOCALE, LOCALE_NAMES, Locale, resolve_list, resolve_text
from adhddb.models import DrugClass, DrugRecord, SideEffect
from adhddb.store.catalog import DrugCatalog

GITHUB_URL = "https://github.com/ya-luotao/adhd-db"

# 로케일별 문구 (목록 구분자 포함)
_COPY: dict[str, dict] = {
    "en": {
        "sep": ", ",
        "tagline": "ADHD Medication Database with multi-region regulatory data",
        "intro": (
            "ADHD-DB is a comprehensive, open-source database of ADHD medications with "
            "regulatory information across multiple regions ({regions}). The database "
            "includes drug information, travel rules, interactions, and clinical data."
        ),
        "links_title": "Quick Links",
        "links": [
            ("Drug Registry", "/data/drugs", "Browse all medications"),
            ("Categories", "/data/categories", "Drug categories and classes"),
            ("API Documentation", "/api-docs", "REST API reference"),
            ("Full Database Export", "/llms-full.txt", "Complete database in plain text"),
        ],
        "stats_title": "Database Statistics",
        "stats": ["Total Drugs", "Stimulants", "Non-Stimulants", "Regions Covered", "Categories"],
        "classes_title": "Drug Classes",
        "stimulants": "Stimulants",
        "non_stimulants": "Non-Stimulants",
        "api_title": "API Access",
        "api_intro": "REST API available at `/api/v1/`:",
        "api": [
            ("GET /api/v1/drugs", "List all drugs"),
            ("GET /api/v1/drugs/{id}", "Get drug by ID"),
            ("GET /api/v1/drugs/{id}/travel?from=US&to=JP", "Travel status between regions"),
            ("GET /api/v1/categories", "List categories"),
            ("GET /api/v1/interactions/check", "Check drug interactions"),
        ],
        "params_intro": "Query parameters:",
        "params": [
            ("?lang=en|zh|zh-TW|ja", "Language (default: en)"),
            ("?class=stimulant|non-stimulant", "Filter by drug class"),
            ("?category={category}", "Filter by category"),
            ("?region={region}", "Filter by region availability"),
        ],
        "i18n_title": "Internationalization",
        "sources_title": "Data Sources",
        "sources": [
            "FDA (U.S. Food and Drug Administration)",
            "OpenFDA Adverse Event Reports",
            "RxNorm (NLM drug naming standard)",
            "ClinicalTrials.gov",
            "Regional regulatory agencies",
        ],
        "license_title": "License",
        "license": (
            "Open source database. Data is provided for informational purposes only "
            "and should not be used for medical advice."
        ),
        "contact_title": "Contact",
        "website": "Website",
    },
    "zh": {
        "sep": "、",
        "tagline": "ADHD药物数据库 - 包含多地区监管数据",
        "intro": (
            "ADHD-DB是一个综合性的开源ADHD药物数据库，涵盖多个地区（{regions}）的监管信息。"
            "数据库包括药物信息、旅行规则、相互作用和临床数据。"
        ),
        "links_title": "快速链接",
        "links": [
            ("药物列表", "/zh/data/drugs", "浏览所有药物"),
            ("药物分类", "/zh/data/categories", "药物分类和类别"),
            ("API文档", "/api-docs", "REST API参考"),
            ("完整数据库导出", "/llms-full.txt", "纯文本格式的完整数据库"),
        ],
        "stats_title": "数据库统计",
        "stats": ["药物总数", "兴奋剂类", "非兴奋剂类", "覆盖地区", "分类数"],
        "classes_title": "药物类别",
        "stimulants": "兴奋剂类",
        "non_stimulants": "非兴奋剂类",
        "api_title": "API访问",
        "api_intro": "REST API可通过 `/api/v1/` 访问:",
        "api": [
            ("GET /api/v1/drugs", "获取所有药物"),
            ("GET /api/v1/drugs/{id}", "按ID获取药物"),
            ("GET /api/v1/drugs/{id}/travel?from=US&to=JP", "查询地区间携带状态"),
            ("GET /api/v1/categories", "获取分类列表"),
            ("GET /api/v1/interactions/check", "检查药物相互作用"),
        ],
        "params_intro": "查询参数:",
        "params": [
            ("?lang=en|zh|zh-TW|ja", "语言（默认: en）"),
            ("?class=stimulant|non-stimulant", "按类别筛选"),
            ("?category={category}", "按分类筛选"),
            ("?region={region}", "按地区可用性筛选"),
        ],
        "i18n_title": "国际化",
        "sources_title": "数据来源",
        "sources": [
            "FDA（美国食品药品监督管理局）",
            "OpenFDA不良事件报告",
            "RxNorm（NLM药物命名标准）",
            "ClinicalTrials.gov",
            "各地区监管机构",
        ],
        "license_title": "许可",
        "license": "开源数据库。数据仅供参考，不应用于医疗建议。",
        "contact_title": "联系方式",
        "website": "网站",
    },
    "zh-TW": {
        "sep": "、",
        "tagline": "ADHD藥物資料庫 - 包含多地區監管資料",
        "intro": (
            "ADHD-DB是一個綜合性的開源ADHD藥物資料庫，涵蓋多個地區（{regions}）的監管資訊。"
            "資料庫包括藥物資訊、旅行規則、交互作用和臨床資料。"
        ),
        "links_title": "快速連結",
        "links": [
            ("藥物列表", "/zh-TW/data/drugs", "瀏覽所有藥物"),
            ("藥物分類", "/zh-TW/data/categories", "藥物分類和類別"),
            ("API文件", "/api-docs", "REST API參考"),
            ("完整資料庫匯出", "/llms-full.txt", "純文字格式的完整資料庫"),
        ],
        "stats_title": "資料庫統計",
        "stats": ["藥物總數", "興奮劑類", "非興奮劑類", "覆蓋地區", "分類數"],
        "classes_title": "藥物類別",
        "stimulants": "興奮劑類",
        "non_stimulants": "非興奮劑類",
        "api_title": "API存取",
        "api_intro": "REST API可透過 `/api/v1/` 存取:",
        "api": [
            ("GET /api/v1/drugs", "取得所有藥物"),
            ("GET /api/v1/drugs/{id}", "按ID取得藥物"),
            ("GET /api/v1/drugs/{id}/travel?from=US&to=JP", "查詢地區間攜帶狀態"),
            ("GET /api/v1/categories", "取得分類列表"),
            ("GET /api/v1/interactions/check", "檢查藥物交互作用"),
        ],
        "params_intro": "查詢參數:",
        "params": [
            ("?lang=en|zh|zh-TW|ja", "語言（預設: en）"),
            ("?class=stimulant|non-stimulant", "按類別篩選"),
            ("?category={category}", "按分類篩選"),
            ("?region={region}", "按地區可用性篩選"),
        ],
        "i18n_title": "國際化",
        "sources_title": "資料來源",
        "sources": [
            "FDA（美國食品藥品監督管理局）",
            "OpenFDA不良事件報告",
            "RxNorm（NLM藥物命名標準）",
            "ClinicalTrials.gov",
            "各地區監管機構",
        ],
        "license_title": "授權",
        "license": "開源資料庫。資料僅供參考，不應用於醫療建議。",
        "contact_title": "聯絡方式",
        "website": "網站",
    },
    "ja": {
        "sep": "、",
        "tagline": "ADHDデータベース - 多地域の規制データを含む",
        "intro": (
            "ADHD-DBは、複数の地域（{regions}）の規制情報を含む包括的なオープンソースADHD薬"
            "データベースです。薬物情報、旅行規則、相互作用、臨床データを含みます。"
        ),
        "links_title": "クイックリンク",
        "links": [
            ("薬物一覧", "/ja/data/drugs", "すべての薬物を閲覧"),
            ("カテゴリ", "/ja/data/categories", "薬物カテゴリと分類"),
            ("APIドキュメント", "/api-docs", "REST APIリファレンス"),
            ("完全データベースエクスポート", "/llms-full.txt", "プレーンテキスト形式の完全データベース"),
        ],
        "stats_title": "データベース統計",
        "stats": ["薬物総数", "中枢刺激薬", "非中枢刺激薬", "対象地域", "カテゴリ数"],
        "classes_title": "薬物クラス",
        "stimulants": "中枢刺激薬",
        "non_stimulants": "非中枢刺激薬",
        "api_title": "APIアクセス",
        "api_intro": "REST APIは `/api/v1/` で利用可能:",
        "api": [
            ("GET /api/v1/drugs", "すべての薬物を取得"),
            ("GET /api/v1/drugs/{id}", "IDで薬物を取得"),
            ("GET /api/v1/drugs/{id}/travel?from=US&to=JP", "地域間の携帯可否を確認"),
            ("GET /api/v1/categories", "カテゴリ一覧"),
            ("GET /api/v1/interactions/check", "薬物相互作用をチェック"),
        ],
        "params_intro": "クエリパラメータ:",
        "params": [
            ("?lang=en|zh|zh-TW|ja", "言語（デフォルト: en）"),
            ("?class=stimulant|non-stimulant", "クラスでフィルタ"),
            ("?category={category}", "カテゴリでフィルタ"),
            ("?region={region}", "地域での入手可能性でフィルタ"),
        ],
        "i18n_title": "国際化",
        "sources_title": "データソース",
        "sources": [
            "FDA（米国食品医薬品局）",
            "OpenFDA有害事象報告",
            "RxNorm（NLM薬物命名標準）",
            "ClinicalTrials.gov",
            "各地域の規制機関",
        ],
        "license_title": "ライセンス",
        "license": "オープンソースデータベース。データは情報提供のみを目的としており、医療アドバイスには使用できません。",
        "contact_title": "連絡先",
        "website": "ウェブサイト",
    },
}


def _locale_path(locale: Locale) -> str:
    return "/" if locale == DEFAULT_LOCALE else f"/{locale.value}/"


def render_llms_txt(catalog: DrugCatalog, locale: str = DEFAULT_LOCALE) -> str:
    """
    로케일별 llms.txt

    Args:
        catalog: 약물 카탈로그
        locale: en, zh, zh-TW, ja

    Returns:
        마크다운 텍스트
    """
    code = Locale(locale).value
    copy = _COPY[code]
    sep = copy["sep"]

    regions = catalog.region_codes
    stimulants = catalog.filter(drug_class=DrugClass.STIMULANT.value)
    non_stimulants = catalog.filter(drug_class=DrugClass.NON_STIMULANT.value)

    lines = []
    lines.append("# ADHD-DB")
    lines.append("")
    lines.append(f"> {copy['tagline']}")
    lines.append("")
    lines.append(copy["intro"].format(regions=sep.join(regions)))
    lines.append("")

    lines.append(f"## {copy['links_title']}")
    lines.append("")
    for title, path, desc in copy["links"]:
        lines.append(f"- [{title}]({path}): {desc}")
    lines.append("")

    labels = copy["stats"]
    lines.append(f"## {copy['stats_title']}")
    lines.append("")
    lines.append(f"- {labels[0]}: {len(catalog.drugs)}")
    lines.append(f"- {labels[1]}: {len(stimulants)}")
    lines.append(f"- {labels[2]}: {len(non_stimulants)}")
    lines.append(f"- {labels[3]}: {len(regions)} ({sep.join(regions)})")
    lines.append(f"- {labels[4]}: {len(catalog.categories)}")
    lines.append("")

    lines.append(f"## {copy['classes_title']}")
    lines.append("")
    for title, drugs in ((copy["stimulants"], stimulants), (copy["non_stimulants"], non_stimulants)):
        lines.append(f"### {title}")
        for drug in drugs:
            lines.append(f"- {resolve_text(drug.generic_name, code)} ({drug.id})")
        lines.append("")

    lines.append(f"## {copy['api_title']}")
    lines.append("")
    lines.append(copy["api_intro"])
    for endpoint, desc in copy["api"]:
        lines.append(f"- `{endpoint}` - {desc}")
    lines.append("")
    lines.append(copy["params_intro"])
    for param, desc in copy["params"]:
        lines.append(f"- `{param}` - {desc}")
    lines.append("")

    lines.append(f"## {copy['i18n_title']}")
    lines.append("")
    for loc, name in LOCALE_NAMES.items():
        lines.append(f"- {name}: {_locale_path(loc)}")
    lines.append("")

    lines.append(f"## {copy['sources_title']}")
    lines.append("")
    for source in copy["sources"]:
        lines.append(f"- {source}")
    lines.append("")

    lines.append(f"## {copy['license_title']}")
    lines.append("")
    lines.append(copy["license"])
    lines.append("")

    lines.append(f"## {copy['contact_title']}")
    lines.append("")
    lines.append(f"- {copy['website']}: {settings.SITE_URL}")
    lines.append(f"- GitHub: {GITHUB_URL}")
    lines.append("")

    return "\n".join(lines)


# ──────────────────────────────────────────────
# llms-full.txt
# ──────────────────────────────────────────────

def _side_effect_lines(title: str, items: tuple[SideEffect, ...], locale: str) -> list[str]:
    if not items:
        return []
    lines = [f"{title}:"]
    for se in items:
        freq = f" ({se.frequency})" if se.frequency else ""
        lines.append(f"- {resolve_text(se.name, locale)}{freq}")
    return lines


def _bullets(title: str, items: list[str]) -> list[str]:
    if not items:
        return []
    return ["", f"### {title}"] + [f"- {item}" for item in items]


def format_drug(drug: DrugRecord, locale: str = DEFAULT_LOCALE) -> str:
    """약물 1개 → 전체 덤프 텍스트 블록"""
    lines = []
    lines.append(f"## {resolve_text(drug.generic_name, locale)}")
    lines.append("")
    lines.append(f"ID: {drug.id}")
    lines.append(f"Drug Class: {drug.drug_class}")
    lines.append(f"Category: {drug.category}")
    lines.append(f"Controlled Substance: {'Yes' if drug.controlled_substance else 'No'}")

    brands = [(region, names) for region, names in drug.brand_names.items() if names]
    if brands:
        lines.append("")
        lines.append("### Brand Names by Region")
        for region, names in brands:
            lines.append(f"- {region}: {', '.join(names)}")

    if drug.schedule:
        lines.append("")
        lines.append("### Controlled Substance Schedule")
        for region, schedule in drug.schedule.items():
            lines.append(f"- {region}: {schedule}")

    if drug.mechanism_of_action:
        lines.append("")
        lines.append("### Mechanism of Action")
        lines.append(resolve_text(drug.mechanism_of_action, locale))

    if drug.neurotransmitters_affected:
        lines.append("")
        lines.append("### Neurotransmitters Affected")
        lines.append(", ".join(drug.neurotransmitters_affected))

    if drug.forms:
        lines.append("")
        lines.append("### Available Forms")
        for form in drug.forms:
            name = resolve_text(form.type_label, locale) if form.type_label else form.type
            release = (
                resolve_text(form.release_type_label, locale)
                if form.release_type_label else form.release_type
            )
            line = f"- {name} ({release})"
            if form.brand_name:
                line += f" - {form.brand_name}"
            if form.duration_hours:
                line += f" - Duration: {form.duration_hours:g}h"
            lines.append(line)
            if form.strengths:
                lines.append(f"  Strengths: {', '.join(form.strengths)}")

    if drug.onset_minutes or drug.peak_effect_hours or drug.duration_hours:
        lines.append("")
        lines.append("### Timing")
        if drug.onset_minutes:
            lines.append(f"- Onset: {drug.onset_minutes:g} minutes")
        if drug.peak_effect_hours:
            lines.append(f"- Peak Effect: {drug.peak_effect_hours:g} hours")
        if drug.duration_hours:
            lines.append(f"- Duration: {drug.duration_hours:g} hours")

    if drug.side_effects:
        lines.append("")
        lines.append("### Side Effects")
        lines.extend(_side_effect_lines("Common", drug.side_effects.common, locale))
        lines.extend(_side_effect_lines("Uncommon", drug.side_effects.uncommon, locale))
        lines.extend(_side_effect_lines("Serious", drug.side_effects.serious, locale))

    lines.extend(_bullets("Contraindications", resolve_list(drug.contraindications, locale)))
    lines.extend(_bullets("Black Box Warnings", resolve_list(drug.black_box_warnings, locale)))
    lines.extend(_bullets("Drug Interactions", [
        f"{resolve_text(i.drug, locale)} ({i.severity}): {resolve_text(i.effect, locale)}"
        for i in drug.drug_interactions
    ]))

    if drug.typical_dosing:
        lines.append("")
        lines.append("### Typical Dosing")
        for title, dosing in (("Children", drug.typical_dosing.children),
                              ("Adults", drug.typical_dosing.adults)):
            if dosing is None:
                continue
            lines.append(f"{title}:")
            if dosing.starting_dose:
                lines.append(f"- Starting: {dosing.starting_dose}")
            if dosing.max_dose:
                lines.append(f"- Maximum: {dosing.max_dose}")

    if drug.approvals:
        lines.append("")
        lines.append("### Regional Approvals")
        for approval in drug.approvals:
            status = "Available" if approval.available else "Not Available"
            since = f" since {approval.year}" if approval.year else ""
            lines.append(f"- {approval.region} ({approval.agency}): {status}{since}")
            indications = resolve_list(approval.indications, locale)
            if indications:
                lines.append(f"  Indications: {'; '.join(indications)}")

    travel = drug.travel_rules
    if travel:
        lines.append("")
        lines.append("### Travel Rules")
        if travel.general_advice:
            lines.append(resolve_text(travel.general_advice, locale))
        if travel.max_personal_supply and travel.max_personal_supply.default:
            lines.append(f"Maximum Personal Supply: {travel.max_personal_supply.default}")
        if travel.cross_border_rules:
            lines.append("")
            lines.append("Cross-Border Rules:")
            for rule in travel.cross_border_rules:
                lines.append(f"- {rule.from_region} → {rule.to_region}: {rule.status.value}")
                requirements = resolve_list(rule.requirements, locale)
                if requirements:
                    lines.append(f"  Requirements: {'; '.join(requirements)}")
                if rule.max_supply:
                    lines.append(f"  Max Supply: {rule.max_supply}")

    fda = drug.fda_data
    if fda:
        lines.append("")
        lines.append("### FDA Data")
        if fda.application_numbers:
            lines.append(f"Application Numbers: {', '.join(fda.application_numbers)}")
        if fda.boxed_warning:
            lines.append(f"Boxed Warning: {resolve_text(fda.boxed_warning, locale)}")
        if fda.fda_label_url:
            lines.append(f"FDA Label: {fda.fda_label_url}")

    trials = drug.clinical_trials_data
    if trials and trials.summary:
        s = trials.summary
        lines.append("")
        lines.append("### Clinical Trials")
        lines.append(f"Total: {s.total} | Recruiting: {s.recruiting} | Completed: {s.completed}")
        if trials.search_url:
            lines.append(f"Search: {trials.search_url}")

    rx = drug.rxnorm_data
    if rx:
        lines.append("")
        lines.append("### RxNorm Data")
        lines.append(f"Ingredient RxCUI: {rx.ingredient_rxcui}")
        lines.append(f"Ingredient Name: {rx.ingredient_name}")
        generic = [s.name for s in rx.synonyms if s.type == "generic"]
        if generic:
            lines.append(f"Synonyms: {', '.join(generic)}")

    lines.extend(_bullets("Sources", list(drug.sources)))

    lines.append("")
    lines.append("---")
    lines.append("")
    return "\n".join(lines)


def render_llms_full(catalog: DrugCatalog, generated_at: Optional[datetime] = None) -> str:
    """전체 데이터베이스 영문 덤프"""
    locale = DEFAULT_LOCALE.value
    generated_at = generated_at or datetime.now()

    sections = []
    sections.append("# ADHD-DB Full Database Export")
    sections.append("")
    sections.append("> Complete ADHD medication database with regulatory data")
    sections.append("")
    sections.append(f"Generated: {generated_at.isoformat()}")
    sections.append(f"Total Drugs: {len(catalog.drugs)}")
    sections.append(f"Regions: {', '.join(catalog.region_codes)}")
    sections.append("")
    sections.append("---")
    sections.append("")

    sections.append("# Drug Classes")
    sections.append("")
    for dc in catalog.drug_classes:
        sections.append(f"## {resolve_text(dc.name, locale)}")
        sections.append(resolve_text(dc.description, locale))
        sections.append(f"Categories: {', '.join(dc.categories)}")
        sections.append("")
    sections.append("---")
    sections.append("")

    sections.append("# Categories")
    sections.append("")
    for cat in catalog.categories:
        sections.append(f"## {resolve_text(cat.name, locale)}")
        sections.append(f"ID: {cat.id}")
        sections.append(f"Drug Class: {cat.drug_class}")
        sections.append(resolve_text(cat.description, locale))
        if cat.mechanism:
            sections.append(f"Mechanism: {resolve_text(cat.mechanism, locale)}")
        if cat.common_brands:
            sections.append(f"Common Brands: {', '.join(cat.common_brands)}")
        sections.append("")
    sections.append("---")
    sections.append("")

    sections.append("# Drugs")
    sections.append("")
    for drug in catalog.drugs:
        sections.append(format_drug(drug, locale))

    return "\n".join(sections)
