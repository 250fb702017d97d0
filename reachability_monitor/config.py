GROUP_SIZE: int = 6                 # probes launched concurrently per group
ICON_TIMEOUT_MS: int = 3500         # attempt 1: favicon / icon url
PRIMARY_TIMEOUT_MS: int = 5000      # attempt 2: the endpoint's own url
PROBE_GRACE_MS: int = 500           # added on top of the summed attempt timeouts

REFRESH_INTERVAL_CHOICES: tuple[int, ...] = (0, 10_000, 30_000, 60_000, 300_000)
DEFAULT_REFRESH_INTERVAL_MS: int = 0   # 0 = auto refresh off

USER_AGENT: str = "ReachabilityMonitor/1.0 (reachability-probe)"

CATEGORY_ORDER: tuple[str, ...] = ("AI", "Search", "Social", "Media", "Dev", "Other")

# add endpoints here; "icon_url" and "description" are optional
ENDPOINTS: list[dict[str, str]] = [
    {"id": "google", "name": "Google", "url": "https://www.google.com", "category": "Search"},
    {
        "id": "gemini",
        "name": "Gemini",
        "url": "https://gemini.google.com",
        "category": "AI",
        "description": "Google Advanced AI",
    },
    {"id": "chatgpt", "name": "ChatGPT", "url": "https://chatgpt.com", "category": "AI"},
    {"id": "claude", "name": "Claude", "url": "https://claude.ai", "category": "AI"},
    {"id": "midjourney", "name": "Midjourney", "url": "https://www.midjourney.com", "category": "AI"},
    {"id": "youtube", "name": "YouTube", "url": "https://www.youtube.com", "category": "Media"},
    {"id": "twitter", "name": "Twitter / X", "url": "https://twitter.com", "category": "Social"},
    {"id": "github", "name": "GitHub", "url": "https://github.com", "category": "Dev"},
    {"id": "reddit", "name": "Reddit", "url": "https://www.reddit.com", "category": "Social"},
    {"id": "wikipedia", "name": "Wikipedia", "url": "https://www.wikipedia.org", "category": "Search"},
    {"id": "netflix", "name": "Netflix", "url": "https://www.netflix.com", "category": "Media"},
    {"id": "spotify", "name": "Spotify", "url": "https://www.spotify.com", "category": "Media"},
    {"id": "telegram", "name": "Telegram", "url": "https://telegram.org", "category": "Social"},
    {"id": "discord", "name": "Discord", "url": "https://discord.com", "category": "Social"},
    {"id": "aws", "name": "AWS Console", "url": "https://aws.amazon.com", "category": "Dev"},
    {"id": "stackoverflow", "name": "Stack Overflow", "url": "https://stackoverflow.com", "category": "Dev"},
    {"id": "twitch", "name": "Twitch", "url": "https://www.twitch.tv", "category": "Media"},
]
