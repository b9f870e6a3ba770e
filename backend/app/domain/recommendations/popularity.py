"""Static popularity ranking used as the base recommendation signal.

Index 0 is the most popular symbol. The table is read-only at runtime.
"""

POPULAR_STOCK_SYMBOLS: tuple[str, ...] = (
    # Mega-cap technology
    "AAPL", "MSFT", "GOOGL", "AMZN", "TSLA", "META", "NVDA", "NFLX", "ORCL", "CRM",
    "ADBE", "INTC", "AMD", "PYPL", "UBER", "INTU", "SPOT", "SQ", "SHOP", "ROKU",
    "SNOW", "PLTR", "COIN", "RBLX", "DDOG", "CRWD", "NET", "OKTA", "TWLO", "ZM",
    "DOCU", "PTON", "PINS", "SNAP", "LYFT", "DASH", "ABNB", "RIVN", "LCID", "NIO",
    "XPEV", "LI", "BABA", "JD", "PDD", "TME", "BILI", "BIDU", "NTES", "IQ",
    # Financials
    "JPM", "BAC", "WFC", "GS", "MS", "C", "V", "MA", "AXP", "BLK",
    "SCHW", "USB", "PNC", "COF", "SOFI", "HOOD", "AFRM", "UPST", "ALLY", "MET",
    # Healthcare
    "JNJ", "PFE", "UNH", "ABBV", "MRK", "LLY", "TMO", "ABT", "BMY", "AMGN",
    "GILD", "CVS", "MRNA", "REGN", "VRTX", "ISRG", "MDT", "DHR", "ZTS", "BIIB",
    # Consumer
    "KO", "PEP", "WMT", "COST", "HD", "MCD", "NKE", "SBUX", "TGT", "LOW",
    "DIS", "CMCSA", "PG", "CL", "EL", "LULU", "CMG", "YUM", "DPZ", "MAR",
    # Industrials and energy
    "BA", "CAT", "GE", "HON", "LMT", "RTX", "DE", "UPS", "FDX", "MMM",
    "XOM", "CVX", "COP", "SLB", "OXY", "EOG", "PSX", "MPC", "VLO", "KMI",
    # Semiconductors and hardware
    "AVGO", "QCOM", "TXN", "MU", "AMAT", "LRCX", "KLAC", "ASML", "TSM", "ARM",
    "SMCI", "DELL", "HPQ", "IBM", "CSCO", "ANET", "MRVL", "ON", "NXPI", "ADI",
    # Communications and media
    "T", "VZ", "TMUS", "CHTR", "WBD", "PARA", "EA", "TTWO", "SONY", "NTDOY",
)
