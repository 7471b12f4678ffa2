"""
Application service: per-ticker stock profiles with a generated narrative.

The numeric part of each profile comes from a fixed in-memory table built once
at import time; tickers outside the table get a neutral template. Only the
narrative text varies between calls, and a failed narrative call fails the
whole request.
"""

import dataclasses
import logging
from datetime import date
from types import MappingProxyType
from typing import Callable, Optional

from stock_analyzer.application.prompts import NARRATIVE_PROMPT
from stock_analyzer.domain.entities.stock_profile import (
    KeyMetrics,
    MarketContext,
    PriceTargets,
    Recommendation,
    RiskAnalysis,
    Sentiment,
    StockProfile,
    TechnicalIndicators,
)
from stock_analyzer.domain.ports.llm_port import ILanguageModel

logger = logging.getLogger(__name__)


STOCK_FIXTURES = MappingProxyType(
    {
        "TSLA": StockProfile(
            symbol="TSLA",
            company_name="Tesla Inc",
            current_price="248.50",
            change="3.25",
            change_percent="1.33",
            volume="89,543,210",
            market_cap="$791.2B",
            day_high="251.20",
            day_low="245.80",
            previous_close="245.25",
            open="246.90",
            sector="Consumer Discretionary",
            sentiment=Sentiment.BULLISH,
            confidence=87,
            key_metrics=KeyMetrics(
                pe_ratio="61.8", eps="4.02", dividend="0.00%", beta="2.29",
                roe="19.3%", debt_to_equity="0.17",
            ),
            technical_indicators=TechnicalIndicators(
                support="240.00", resistance="260.00", rsi="Slightly Overbought (68)",
                sma50="235.40", sma200="220.15", trend="Bullish",
            ),
            price_targets=PriceTargets(
                short_term="265.00", medium_term="285.00", long_term="320.00"
            ),
            risk_analysis=RiskAnalysis(
                risk_level="HIGH",
                risk_factors=(
                    "High volatility due to CEO's public statements and market sentiment",
                    "Intense competition in the EV market from traditional automakers",
                    "Regulatory changes affecting EV incentives and autonomous driving",
                ),
                risk_mitigation=(
                    "Diversify across multiple EV and tech stocks",
                    "Monitor quarterly delivery numbers and production capacity",
                ),
            ),
            opportunities=(
                "Expansion of Supercharger network and energy storage business",
                "Full Self-Driving technology advancement and regulatory approval",
                "International market expansion, particularly in Asia and Europe",
            ),
            recommendation=Recommendation(
                action="BUY",
                reasoning=(
                    "Tesla maintains its leadership position in the EV market with strong "
                    "delivery growth, expanding energy business, and advancing autonomous "
                    "technology. Despite high valuation, the company's innovation pipeline "
                    "and market expansion justify a bullish outlook."
                ),
                time_horizon="LONG",
                position_size="Moderate (5-8% of portfolio due to volatility)",
            ),
            market_context=MarketContext(
                economic_factors="Benefiting from green energy transition and government EV incentives",
                sector_performance="EV sector showing strong growth with increasing adoption",
                competitive_position="Market leader with strong brand and technology moat",
            ),
        ),
        "AAPL": StockProfile(
            symbol="AAPL",
            company_name="Apple Inc",
            current_price="189.84",
            change="1.45",
            change_percent="0.77",
            volume="47,325,180",
            market_cap="$2.98T",
            day_high="191.20",
            day_low="188.50",
            previous_close="188.39",
            open="189.10",
            sector="Technology",
            sentiment=Sentiment.BULLISH,
            confidence=92,
            key_metrics=KeyMetrics(
                pe_ratio="31.2", eps="6.08", dividend="0.44%", beta="1.24",
                roe="160.1%", debt_to_equity="1.73",
            ),
            technical_indicators=TechnicalIndicators(
                support="185.00", resistance="195.00", rsi="Neutral (55)",
                sma50="186.20", sma200="176.85", trend="Bullish",
            ),
            price_targets=PriceTargets(
                short_term="195.00", medium_term="210.00", long_term="225.00"
            ),
            risk_analysis=RiskAnalysis(
                risk_level="LOW",
                risk_factors=(
                    "China market dependency and geopolitical tensions",
                    "Smartphone market saturation in developed countries",
                    "Increasing competition in services segment",
                ),
                risk_mitigation=(
                    "Strong brand loyalty and ecosystem lock-in effects",
                    "Diversified revenue streams across products and services",
                ),
            ),
            opportunities=(
                "AI integration across Apple ecosystem and devices",
                "Expansion of services revenue including Apple Pay and subscriptions",
                "Potential entry into new product categories like VR/AR and automotive",
            ),
            recommendation=Recommendation(
                action="BUY",
                reasoning=(
                    "Apple's strong ecosystem, loyal customer base, and growing services "
                    "revenue provide stable growth. AI integration and new product "
                    "categories offer significant upside potential."
                ),
                time_horizon="LONG",
                position_size="Core holding (8-12% of portfolio)",
            ),
            market_context=MarketContext(
                economic_factors="Resilient demand despite economic uncertainties",
                sector_performance="Tech sector leading market recovery",
                competitive_position="Dominant position with strong competitive moats",
            ),
        ),
        "NVDA": StockProfile(
            symbol="NVDA",
            company_name="NVIDIA Corporation",
            current_price="465.20",
            change="8.75",
            change_percent="1.92",
            volume="156,420,890",
            market_cap="$1.14T",
            day_high="468.90",
            day_low="458.30",
            previous_close="456.45",
            open="459.80",
            sector="Technology",
            sentiment=Sentiment.BULLISH,
            confidence=89,
            key_metrics=KeyMetrics(
                pe_ratio="65.8", eps="7.07", dividend="0.09%", beta="1.68",
                roe="36.9%", debt_to_equity="0.26",
            ),
            technical_indicators=TechnicalIndicators(
                support="450.00", resistance="480.00", rsi="Overbought (72)",
                sma50="445.60", sma200="398.25", trend="Strong Bullish",
            ),
            price_targets=PriceTargets(
                short_term="485.00", medium_term="520.00", long_term="580.00"
            ),
            risk_analysis=RiskAnalysis(
                risk_level="MEDIUM",
                risk_factors=(
                    "High dependence on AI/data center demand sustainability",
                    "Potential regulatory restrictions on China sales",
                    "Cyclical nature of semiconductor industry",
                ),
                risk_mitigation=(
                    "Diversified product portfolio across gaming, AI, and automotive",
                    "Strong technological moat in GPU architecture",
                ),
            ),
            opportunities=(
                "Continued AI and machine learning adoption across industries",
                "Expansion in autonomous vehicle and robotics markets",
                "Growth in edge computing and IoT applications",
            ),
            recommendation=Recommendation(
                action="BUY",
                reasoning=(
                    "NVIDIA is at the center of the AI revolution with dominant market "
                    "position in AI chips. Strong demand for data center GPUs and expanding "
                    "AI applications drive long-term growth."
                ),
                time_horizon="LONG",
                position_size="Growth allocation (6-10% of portfolio)",
            ),
            market_context=MarketContext(
                economic_factors="AI investment boom driving semiconductor demand",
                sector_performance="Semiconductor sector outperforming on AI tailwinds",
                competitive_position="Clear market leader in AI/ML acceleration",
            ),
        ),
        "MSFT": StockProfile(
            symbol="MSFT",
            company_name="Microsoft Corporation",
            current_price="415.26",
            change="2.89",
            change_percent="0.70",
            volume="28,945,670",
            market_cap="$3.08T",
            day_high="417.50",
            day_low="412.80",
            previous_close="412.37",
            open="413.90",
            sector="Technology",
            sentiment=Sentiment.BULLISH,
            confidence=91,
            key_metrics=KeyMetrics(
                pe_ratio="35.4", eps="11.73", dividend="0.68%", beta="0.89",
                roe="38.1%", debt_to_equity="0.35",
            ),
            technical_indicators=TechnicalIndicators(
                support="405.00", resistance="425.00", rsi="Neutral (58)",
                sma50="408.75", sma200="385.40", trend="Bullish",
            ),
            price_targets=PriceTargets(
                short_term="430.00", medium_term="450.00", long_term="480.00"
            ),
            risk_analysis=RiskAnalysis(
                risk_level="LOW",
                risk_factors=(
                    "Cloud competition from Amazon and Google intensifying",
                    "Antitrust scrutiny and regulatory oversight",
                    "Dependence on enterprise spending cycles",
                ),
                risk_mitigation=(
                    "Diversified revenue streams across cloud, productivity, and gaming",
                    "Strong market position in enterprise software and cloud services",
                ),
            ),
            opportunities=(
                "AI integration across Microsoft 365 and Azure cloud services",
                "Continued cloud migration and digital transformation trends",
                "Gaming expansion with Xbox Game Pass and cloud gaming",
            ),
            recommendation=Recommendation(
                action="BUY",
                reasoning=(
                    "Microsoft's strong position in cloud computing, AI integration, and "
                    "enterprise software provides sustainable competitive advantages. Azure "
                    "growth and AI monetization drive long-term value."
                ),
                time_horizon="LONG",
                position_size="Core holding (8-12% of portfolio)",
            ),
            market_context=MarketContext(
                economic_factors="Enterprise digital transformation driving cloud adoption",
                sector_performance="Cloud infrastructure segment showing robust growth",
                competitive_position="Strong #2 position in cloud with differentiated AI offerings",
            ),
        ),
    }
)


def generic_profile(symbol: str, company_name: str) -> StockProfile:
    """Neutral placeholder profile for tickers outside STOCK_FIXTURES."""
    return StockProfile(
        symbol=symbol,
        company_name=company_name,
        current_price="150.00",
        change="1.25",
        change_percent="0.84",
        volume="25,000,000",
        market_cap="$500B",
        day_high="152.00",
        day_low="148.50",
        previous_close="148.75",
        open="149.20",
        sector="Technology",
        sentiment=Sentiment.NEUTRAL,
        confidence=75,
        key_metrics=KeyMetrics(
            pe_ratio="25.5", eps="5.88", dividend="1.2%", beta="1.15",
            roe="18.5%", debt_to_equity="0.45",
        ),
        technical_indicators=TechnicalIndicators(
            support="145.00", resistance="155.00", rsi="Neutral (52)",
            sma50="147.80", sma200="142.30", trend="Sideways",
        ),
        price_targets=PriceTargets(
            short_term="155.00", medium_term="165.00", long_term="180.00"
        ),
        risk_analysis=RiskAnalysis(
            risk_level="MEDIUM",
            risk_factors=(
                "Market volatility affecting sector performance",
                "Competition in core business segments",
                "Economic conditions impacting growth prospects",
            ),
            risk_mitigation=(
                "Diversify across different sectors and market caps",
                "Monitor company fundamentals and earnings reports",
            ),
        ),
        opportunities=(
            "Market expansion and new product development",
            "Technological innovation driving competitive advantage",
            "Strategic partnerships and acquisition opportunities",
        ),
        recommendation=Recommendation(
            action="HOLD",
            reasoning=(
                "Company shows stable fundamentals with moderate growth prospects. Current "
                "valuation appears fair with balanced risk-reward profile."
            ),
            time_horizon="MEDIUM",
            position_size="Moderate allocation (3-5% of portfolio)",
        ),
        market_context=MarketContext(
            economic_factors="Mixed economic conditions creating uncertainty",
            sector_performance="Sector showing steady but moderate performance",
            competitive_position="Solid market position with room for improvement",
        ),
    )


def fixture_profile(symbol: str, company_name: str) -> StockProfile:
    return STOCK_FIXTURES.get(symbol) or generic_profile(symbol, company_name)


class StockProfileProvider:
    TEMPERATURE: float = 0.3
    MAX_TOKENS: int = 1500

    def __init__(
        self,
        llm: ILanguageModel,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._llm = llm
        self._today = today or date.today

    async def get_profile(self, ticker: str, company_name: str) -> StockProfile:
        """Return the fixture profile for *ticker* with a freshly generated narrative.

        Raises:
            LanguageModelError: if the narrative call fails.
        """
        profile = fixture_profile(ticker, company_name)
        prompt = NARRATIVE_PROMPT.format(
            company_name=profile.company_name,
            symbol=profile.symbol,
            as_of=self._today().strftime("%m/%d/%Y"),
            current_price=profile.current_price,
            change=profile.change,
            change_percent=profile.change_percent,
            volume=profile.volume,
            market_cap=profile.market_cap,
            sector=profile.sector,
        )
        narrative = await self._llm.generate(
            prompt, temperature=self.TEMPERATURE, max_tokens=self.MAX_TOKENS
        )
        logger.info("Generated %d-character narrative for %s", len(narrative), ticker)
        return dataclasses.replace(profile, analysis=narrative.strip())
