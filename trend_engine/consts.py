import os
from pathlib import Path

DEFAULT_DATA_DIR = Path(
    os.getenv("TREND_ENGINE_DATA_DIR", "").strip()
    or (Path(__file__).parent.parent.resolve() / "data")
).absolute().resolve()

# Dimension names in canonical order (onchain is blockchain-only)
DIMENSIONS = ["code_hosting", "community", "jobs", "ecosystem", "onchain"]

# Fallback weight profile when category is unknown
DEFAULT_WEIGHTS = {
    "code_hosting": 0.25,
    "community": 0.20,
    "jobs": 0.25,
    "ecosystem": 0.30,
}

# Base weights by category.
# Languages/backend/database/devops/cloud lean on jobs (employers list them).
# AI/ML leans on community, which leads adoption by 6-12 months.
CATEGORY_WEIGHTS = {
    "language": {"code_hosting": 0.20, "community": 0.15, "jobs": 0.35, "ecosystem": 0.30},
    "frontend": {"code_hosting": 0.25, "community": 0.25, "jobs": 0.25, "ecosystem": 0.25},
    "backend": {"code_hosting": 0.20, "community": 0.15, "jobs": 0.35, "ecosystem": 0.30},
    "database": {"code_hosting": 0.15, "community": 0.10, "jobs": 0.40, "ecosystem": 0.35},
    "devops": {"code_hosting": 0.15, "community": 0.15, "jobs": 0.40, "ecosystem": 0.30},
    "cloud": {"code_hosting": 0.10, "community": 0.15, "jobs": 0.45, "ecosystem": 0.30},
    "mobile": {"code_hosting": 0.20, "community": 0.20, "jobs": 0.30, "ecosystem": 0.30},
    "ai_ml": {"code_hosting": 0.25, "community": 0.30, "jobs": 0.25, "ecosystem": 0.20},
    "blockchain": {
        "code_hosting": 0.20,
        "community": 0.20,
        "jobs": 0.25,
        "ecosystem": 0.15,
        "onchain": 0.20,
    },
}

# Realistically achievable dimensions per category (completeness denominator).
# Cloud platforms have no repo and no package downloads.
MAX_POSSIBLE_DIMENSIONS = {
    "cloud": 2,  # community + jobs
    "devops": 3,  # code hosting + community + jobs
    "language": 3,  # distributed via OS, not package registries
    "frontend": 4,
    "backend": 4,
    "database": 4,
    "mobile": 4,
    "ai_ml": 4,
    "blockchain": 5,  # + onchain
    "testing": 4,
    "other": 4,
}
DEFAULT_MAX_DIMENSIONS = 4

# Maximum number of raw data sources per category (confidence source coverage)
MAX_SOURCES = {
    "language": 14,
    "frontend": 14,
    "backend": 13,
    "database": 10,
    "devops": 10,
    "cloud": 9,
    "mobile": 11,
    "ai_ml": 12,
}
DEFAULT_MAX_SOURCES = 12

# Maximum number of raw metrics a technology can report in one day
MAX_DAILY_METRICS = 12

# Category assumed when a technology has none
DEFAULT_CATEGORY = "language"

# Data age assumed when a technology has no creation date
DEFAULT_DATA_AGE_DAYS = 365

# Bayesian smoothing prior strength, in data points (0 disables smoothing)
BAYESIAN_PRIOR_WEIGHT = 3.0
BAYESIAN_FALLBACK_MEAN = 50.0

# History window read for momentum and anomaly detection
HISTORY_WINDOW_DAYS = 90

# Momentum analyzer
MOMENTUM_MIN_POINTS = 3
MOMENTUM_SHORT_WINDOW = 7
MOMENTUM_MEDIUM_WINDOW = 30
MOMENTUM_LONG_WINDOW = 90
MOMENTUM_CONFIDENCE_DAYS = 60

# Anomaly detector
ANOMALY_MIN_HISTORY = 7
ZSCORE_CRITICAL = 4.5
ZSCORE_SIGNIFICANT = 3.5
ZSCORE_NOTABLE = 2.5

# Registry download sources summed into a single downloads value
DOWNLOAD_SOURCES = ["npm", "pypi", "crates", "packagist", "rubygems", "nuget"]

# Maps "source:metric" keys onto TechDataPoints fields
METRIC_FIELD_MAP = {
    "github:stars": "stars",
    "github:forks": "forks",
    "github:open_issues": "open_issues",
    "github:closed_issues": "closed_issues",
    "github:active_contributors": "active_contributors",
    "github:commit_velocity": "commit_velocity",
    "hackernews:mentions": "hn_mentions",
    "hackernews:sentiment": "hn_sentiment",
    "reddit:posts": "reddit_posts",
    "reddit:sentiment": "reddit_sentiment",
    "devto:articles": "devto_articles",
    "rss:mentions": "rss_mentions",
    "adzuna:job_postings": "adzuna_jobs",
    "jsearch:job_postings": "jsearch_jobs",
    "remotive:job_postings": "remotive_jobs",
    "stackoverflow:questions": "so_questions",
    "stackoverflow:mentions": "so_mentions",
    "librariesio:dependents_count": "dependents_count",
    "librariesio:dependent_repos_count": "dependent_repos",
    "librariesio:sourcerank": "sourcerank",
    "npms:quality_score": "npms_quality",
    "npms:popularity_score": "npms_popularity",
    "npms:maintenance_score": "npms_maintenance",
    "defillama:tvl_score": "tvl_score",
    "coingecko:dev_activity_score": "dev_activity_score",
    "etherscan:chain_activity_score": "chain_activity_score",
}
