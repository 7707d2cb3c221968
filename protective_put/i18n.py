"""
Localized text for advisories, recommendations and report labels.

Lookups fall back to English, then to the key itself. Placeholders use
"{name}" and are filled from keyword arguments.
"""

from dataclasses import dataclass
from typing import Dict

from protective_put.options.advisories import Advisory, AdvisoryCode, RecommendationCode


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    rtl: bool = False


LANGUAGES: Dict[str, Language] = {
    "en": Language("en", "English"),
    "he": Language("he", "עברית", rtl=True),
    "nl": Language("nl", "Nederlands"),
}

EN = {
    "app_title": "Protective Put Calculator",
    "app_subtitle": "Advanced Portfolio Insurance & Risk Management",
    "strategy_overview": "Strategy Overview",
    "stock_symbol": "Stock Symbol",
    "current_stock_price": "Current Stock Price",
    "number_of_shares": "Number of Shares",
    "protection_level": "Protection Level",
    "time_horizon": "Time Horizon",
    "risk_free_rate": "Risk-Free Rate",
    "implied_volatility": "Implied Volatility",
    "strike_price": "Strike Price",
    "put_premium": "Put Premium",
    "per_contract": "per contract",
    "total_cost": "Total Cost",
    "of_portfolio": "of portfolio",
    "annualized_cost": "Annualized Cost",
    "per_year": "per year",
    "max_loss": "Max Loss",
    "breakeven": "Breakeven",
    "protected_value": "Protected Value",
    "portfolio_value": "Portfolio Value",
    "warnings": "Warnings",
    "option_greeks": "Option Greeks",
    "delta": "Delta",
    "gamma": "Gamma",
    "theta": "Theta (daily)",
    "vega": "Vega (1% vol)",
    "scenario_analysis": "Scenario Analysis",
    "stock_price": "Stock Price",
    "stock_value": "Stock Value",
    "put_value": "Put Value",
    "total_value": "Total Value",
    "pnl": "P&L",
    "pnl_percent": "P&L %",
    "strategy_recommendations": "Strategy Recommendations",
    "days": "{days} Days",
    "live_data": "Live Data",
    "fallback_data": "Fallback Data",
    "via_provider": "via {provider}",
    "estimated_from_data": "Estimated from data",
    "cannot_calculate": "Cannot calculate: {reason}",

    # Advisories
    "high_cost_warning": "High protection cost: {cost}% annually exceeds {threshold}% threshold",
    "time_decay_warning": "Short time horizon may result in high time decay (theta)",
    "high_volatility_warning": "High volatility increases option premium costs",
    "expensive_protection_warning": "Very high protection level increases premium costs significantly",
    "low_delta_warning": "Low delta indicates put may provide limited protection",

    # Recommendations
    "cost_effective_protection": "✓ Cost-effective protection: Annualized cost is within acceptable range",
    "adequate_protection": "✓ Adequate protection level: Put delta provides meaningful downside protection",
    "reasonable_time_horizon": "✓ Reasonable time horizon: Sufficient time reduces daily theta decay impact",
    "monitor_time_decay": "• Monitor time decay (theta) as expiration approaches",
    "consider_rolling": "• Consider rolling position if stock approaches strike price",
    "evaluate_cost_benefit": "• Evaluate cost vs. benefit relative to alternative hedging strategies",
}

HE = {
    "app_title": "מחשבון פוט מגן",
    "app_subtitle": "ביטוח תיק השקעות וניהול סיכונים מתקדם",
    "strategy_overview": "סקירת אסטרטגיה",
    "stock_symbol": "סמל המניה",
    "current_stock_price": "מחיר מניה נוכחי",
    "number_of_shares": "מספר מניות",
    "protection_level": "רמת הגנה",
    "time_horizon": "אופק זמן",
    "risk_free_rate": "ריבית חסרת סיכון",
    "implied_volatility": "תנודתיות משוערת",
    "strike_price": "מחיר מימוש",
    "put_premium": "פרמיית פוט",
    "per_contract": "לחוזה",
    "total_cost": "עלות כוללת",
    "of_portfolio": "מהתיק",
    "annualized_cost": "עלות שנתית",
    "per_year": "לשנה",
    "max_loss": "הפסד מקסימלי",
    "breakeven": "נקודת איזון",
    "protected_value": "ערך מוגן",
    "portfolio_value": "ערך תיק",
    "warnings": "אזהרות",
    "option_greeks": "גריקים של אופציה",
    "delta": "דלתא",
    "gamma": "גמא",
    "theta": "תטא (יומי)",
    "vega": "וגה (1% תנודתיות)",
    "scenario_analysis": "ניתוח תרחישים",
    "stock_price": "מחיר מניה",
    "stock_value": "ערך מניות",
    "put_value": "ערך פוט",
    "total_value": "ערך כולל",
    "pnl": "רווח/הפסד",
    "pnl_percent": "רווח/הפסד %",
    "strategy_recommendations": "המלצות אסטרטגיה",
    "days": "{days} ימים",
    "estimated_from_data": "מוערך מהנתונים",

    "high_cost_warning": "עלות הגנה גבוהה: {cost}% שנתית חורגת מסף {threshold}%",
    "time_decay_warning": "אופק זמן קצר עלול לגרום לדעיכת זמן גבוהה (תטא)",
    "expensive_protection_warning": "רמת הגנה גבוהה מאוד מגדילה משמעותית את עלויות הפרמיה",
    "low_delta_warning": "דלתא נמוכה מעידה על הגנה מוגבלת של הפוט",

    "cost_effective_protection": "✓ הגנה חסכנית: העלות השנתית נמצאת בטווח מקובל",
    "adequate_protection": "✓ רמת הגנה מתאימה: דלתא הפוט מספקת הגנה משמעותית",
    "reasonable_time_horizon": "✓ אופק זמן סביר: זמן מספיק מפחית את השפעת התטא היומי",
    "monitor_time_decay": "• עקוב אחר דעיכת הזמן (תטא) כשמתקרבים לפירוק",
    "consider_rolling": "• שקול לגלגל את הפוזיציה אם המניה מתקרבת למחיר המימוש",
    "evaluate_cost_benefit": "• העריך עלות מול תועלת יחסית לאסטרטגיות גידור חלופיות",
}

NL = {
    "app_title": "Beschermende Put Calculator",
    "strategy_overview": "Strategie Overzicht",
    "strike_price": "Uitoefenprijs",
    "put_premium": "Put Premie",
    "total_cost": "Totale Kosten",
    "of_portfolio": "van portfolio",
    "annualized_cost": "Geannualiseerde Kosten",
    "per_year": "per jaar",
    "max_loss": "Max Verlies",
    "breakeven": "Break-even",
    "protected_value": "Beschermde Waarde",
    "portfolio_value": "Portefeuille Waarde",
    "warnings": "Waarschuwingen",
    "option_greeks": "Optie Greeks",
    "theta": "Theta (dagelijks)",
    "scenario_analysis": "Scenario Analyse",
    "stock_price": "Aandeelprijs",
    "stock_value": "Aandelen Waarde",
    "put_value": "Put Waarde",
    "total_value": "Totale Waarde",
    "pnl": "W&V",
    "pnl_percent": "W&V %",
    "strategy_recommendations": "Strategie Aanbevelingen",
    "days": "{days} Dagen",
    "estimated_from_data": "Geschat uit data",

    "high_cost_warning": "Hoge beschermingskosten: {cost}% jaarlijks overschrijdt {threshold}% drempel",
    "time_decay_warning": "Korte tijdshorizon kan resulteren in hoog tijdsverval (theta)",
    "high_volatility_warning": "Hoge volatiliteit verhoogt optie premie kosten",
    "expensive_protection_warning": "Zeer hoog beschermingsniveau verhoogt premiekosten aanzienlijk",
    "low_delta_warning": "Lage delta geeft aan dat put beperkte bescherming kan bieden",

    "cost_effective_protection": "✓ Kosteneffectieve bescherming: Geannualiseerde kosten binnen acceptabele range",
    "adequate_protection": "✓ Adequate bescherming: Put delta biedt betekenisvolle neerwaartse bescherming",
    "reasonable_time_horizon": "✓ Redelijke tijdshorizon: Voldoende tijd vermindert dagelijkse theta verval impact",
    "monitor_time_decay": "• Monitor tijdsverval (theta) naarmate vervaldatum nadert",
    "consider_rolling": "• Overweeg positie te rollen als aandeel uitoefenprijs nadert",
    "evaluate_cost_benefit": "• Evalueer kosten vs. baten relatief tot alternatieve afdekkingsstrategieën",
}

TRANSLATIONS: Dict[str, Dict[str, str]] = {"en": EN, "he": HE, "nl": NL}

ADVISORY_KEYS = {
    AdvisoryCode.HIGH_COST: "high_cost_warning",
    AdvisoryCode.SHORT_HORIZON: "time_decay_warning",
    AdvisoryCode.HIGH_VOLATILITY: "high_volatility_warning",
    AdvisoryCode.EXPENSIVE_PROTECTION: "expensive_protection_warning",
    AdvisoryCode.LOW_DELTA: "low_delta_warning",
}

RECOMMENDATION_KEYS = {
    RecommendationCode.COST_EFFECTIVE: "cost_effective_protection",
    RecommendationCode.ADEQUATE_PROTECTION: "adequate_protection",
    RecommendationCode.REASONABLE_HORIZON: "reasonable_time_horizon",
    RecommendationCode.MONITOR_TIME_DECAY: "monitor_time_decay",
    RecommendationCode.CONSIDER_ROLLING: "consider_rolling",
    RecommendationCode.EVALUATE_COST_BENEFIT: "evaluate_cost_benefit",
}


def translate(key: str, language: str = "en", **params) -> str:
    table = TRANSLATIONS.get(language, EN)
    text = table.get(key) or EN.get(key) or key
    for name, value in params.items():
        text = text.replace("{" + name + "}", str(value))
    return text


def is_rtl(language: str) -> bool:
    lang = LANGUAGES.get(language)
    return bool(lang and lang.rtl)


def render_advisory(advisory: Advisory, language: str = "en") -> str:
    return translate(ADVISORY_KEYS[advisory.code], language, **advisory.params)


def render_recommendation(code: RecommendationCode, language: str = "en") -> str:
    return translate(RECOMMENDATION_KEYS[code], language)
