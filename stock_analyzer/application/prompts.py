"""
Prompt templates for every text-generation call made by the service.
Keeping the prompts in the application layer keeps them close to the business
rules they encode, while remaining independent from any provider SDK.
"""

VALIDATION_PROMPT = """
You are a financial validator. Determine if the input is completely irrelevant to stocks/finance or could be stock-related.

ONLY respond "INVALID" for clearly irrelevant inputs like:
- Pure greetings: "hi", "hello", "hey"
- Personal questions: "how are you", "what's your name", "are you married"
- Completely unrelated topics: "weather", "food", "sports" (unless mentioning stock symbols)

Respond "VALID" for ANYTHING that could be stock-related, including:
- Company names: "Apple", "Tesla", "Microsoft", "Google"
- Stock symbols: "AAPL", "TSLA", "MSFT", "GOOGL"
- Stock questions: "analyze Apple", "Tesla stock", "how is Microsoft doing"
- Any text containing potential company names or stock symbols
- Financial terms or investment-related words

Input: "{user_input}"

Respond with ONLY "VALID" or "INVALID":
"""

IDENTIFICATION_PROMPT = """
Identify the stock symbol and company name from this input: "{user_input}"

You must respond with ONLY valid JSON in this exact format:
{{"symbol":"SYMBOL","companyName":"Company Name","identified":true}}

If you cannot identify a valid stock, respond with:
{{"symbol":"UNKNOWN","companyName":"Unknown","identified":false}}

Examples:
Input: "Tesla" → {{"symbol":"TSLA","companyName":"Tesla Inc","identified":true}}
Input: "AAPL" → {{"symbol":"AAPL","companyName":"Apple Inc","identified":true}}
Input: "Microsoft" → {{"symbol":"MSFT","companyName":"Microsoft Corporation","identified":true}}

Input: "{user_input}"
JSON Response:"""

NARRATIVE_PROMPT = """
You are a senior financial analyst providing comprehensive analysis for {company_name} ({symbol}) based on current market conditions as of {as_of}.

Current market data for {symbol}:
- Current Price: ${current_price}
- Daily Change: {change} ({change_percent}%)
- Volume: {volume}
- Market Cap: {market_cap}
- Sector: {sector}

Provide a comprehensive analysis considering:
1. Current market position and recent performance
2. Fundamental analysis including financials and business model
3. Technical analysis and price trends
4. Risk assessment and key risk factors
5. Growth opportunities and catalysts
6. Investment recommendation with clear reasoning

Write a detailed 4-5 paragraph analysis covering all these aspects with specific insights about {company_name}'s business, competitive position, and market outlook.
"""

CRYPTO_GUIDANCE = """
For cryptocurrency analysis, also consider:
- Blockchain metrics and adoption
- Regulatory environment
- Technology developments
- Market cycles and correlation with Bitcoin
"""

STOCK_GUIDANCE = """
For stock analysis, also consider:
- Earnings expectations and guidance
- Sector rotation and market conditions
- Institutional sentiment
- Valuation metrics (P/E, growth rates)
"""

RESEARCH_PROMPT = """
You are an expert financial analyst providing research insights for the onntix platform. You have access to real-time market data and should provide actionable, data-driven analysis.

{context}

User Query: {user_query}

Please provide a detailed analysis covering:

1. **Current Market Position**: Analyze the current price action, volume, and recent performance
2. **Technical Analysis**: Key support/resistance levels, trend analysis, momentum indicators
3. **Fundamental Factors**: Company/asset fundamentals, sector analysis, competitive position
4. **Risk Assessment**: Key risks and potential catalysts (both positive and negative)
5. **Market Outlook**: Short-term (1-3 months) and medium-term (6-12 months) outlook
6. **Key Levels**: Important price levels to watch for entry/exit points

{guidance}

Format your response in clear sections with specific price targets and actionable insights. Be objective and mention both bullish and bearish scenarios.

Keep the response comprehensive but concise (400-600 words).
"""

SIGNALS_PROMPT = """
Based on the market data and analysis for {symbol}, provide 3 specific trading signals with exact price levels:

{context}

Consider the current price of ${current_price} and recent market action.

Respond with a JSON object containing an array of signals:
{{
  "signals": [
    {{
      "type": "BUY" | "SELL" | "HOLD",
      "confidence": "HIGH" | "MEDIUM" | "LOW",
      "timeframe": "SHORT" | "MEDIUM" | "LONG",
      "reason": "Specific technical or fundamental reason",
      "target": "Specific price target",
      "stopLoss": "Risk management level",
      "entryPrice": "Suggested entry price range"
    }}
  ]
}}

Provide realistic price targets based on technical analysis and current market conditions.
"""
