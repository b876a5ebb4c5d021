"""기본 토픽 분류 체계와 기본 수집 대상."""

DEFAULT_TOPICS: list[dict] = [
    {
        "name": "Cryptocurrency",
        "keywords": ["bitcoin", "btc", "ethereum", "eth", "crypto", "blockchain", "defi", "nft",
                     "altcoin", "hodl", "wallet", "mining"],
    },
    {
        "name": "Stocks & Investing",
        "keywords": ["stock", "invest", "dividend", "portfolio", "etf", "nasdaq", "sp500", "s&p",
                     "trading", "bull", "bear", "market"],
    },
    {
        "name": "Real Estate",
        "keywords": ["real estate", "property", "mortgage", "rental", "landlord", "housing", "reit",
                     "flip", "airbnb"],
    },
    {
        "name": "Side Hustles",
        "keywords": ["side hustle", "passive income", "freelance", "gig", "dropshipping",
                     "affiliate", "monetize", "income stream"],
    },
    {
        "name": "Watches & Luxury",
        "keywords": ["rolex", "watch", "omega", "patek", "audemars", "luxury", "timepiece",
                     "horology", "collector"],
    },
    {
        "name": "Artificial Intelligence",
        "keywords": ["ai", "artificial intelligence", "machine learning", "chatgpt", "llm", "openai",
                     "claude", "automation", "neural"],
    },
    {
        "name": "Gaming",
        "keywords": ["gaming", "gamer", "esports", "twitch", "steam", "playstation", "xbox",
                     "nintendo", "pc gaming"],
    },
    {
        "name": "Fitness & Health",
        "keywords": ["fitness", "gym", "workout", "health", "nutrition", "diet", "protein", "muscle",
                     "cardio", "weight loss"],
    },
    {
        "name": "Personal Finance",
        "keywords": ["budget", "savings", "debt", "fire", "retire", "financial", "money management",
                     "credit", "loan"],
    },
    {
        "name": "Entrepreneurship",
        "keywords": ["startup", "entrepreneur", "business", "founder", "saas", "bootstrap",
                     "venture", "scale", "mvp"],
    },
    {
        "name": "Career & Jobs",
        "keywords": ["career", "job", "resume", "interview", "salary", "remote work", "wfh",
                     "promotion", "linkedin"],
    },
    {
        "name": "Fashion",
        "keywords": ["fashion", "style", "outfit", "designer", "clothing", "streetwear", "sneaker",
                     "brand"],
    },
    {
        "name": "Cars & Automotive",
        "keywords": ["car", "automotive", "tesla", "ev", "electric vehicle", "supercar", "jdm",
                     "modified"],
    },
    {
        "name": "Travel",
        "keywords": ["travel", "vacation", "flight", "hotel", "destination", "backpack", "nomad",
                     "explore"],
    },
    {
        "name": "Content Creation",
        "keywords": ["youtube", "content creator", "influencer", "subscriber", "viral", "algorithm",
                     "monetization", "sponsor"],
    },
]

DEFAULT_TARGETS: dict[str, list[str]] = {
    "reddit": ["cryptocurrency", "wallstreetbets", "stocks", "sidehustle", "entrepreneur"],
    "x": [],
    "youtube": [],
}
