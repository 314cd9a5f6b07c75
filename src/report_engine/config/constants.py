"""Fixed constants shared across scoring, selection and search."""

# Composite score weights: domain authority, topical context, freshness, extractability
W_DOMAIN_AUTHORITY = 0.4
W_TOPICAL_CONTEXT = 0.3
W_FRESHNESS = 0.2
W_EXTRACTABILITY = 0.1

# Freshness
FRESHNESS_HALF_LIFE_DAYS = 180.0
FRESHNESS_FLOOR = 0.1
FRESHNESS_UNKNOWN_DATE = 0.5

# Extractability
EXTRACTABILITY_BASE = 0.3

# Keyword density reaching this share of tokens saturates the context score
KEYWORD_DENSITY_SATURATION = 0.01

# Snippets derived at ingestion time
SNIPPET_MAX_CHARS = 300

# Citation context window on each side of a marker
CITATION_CONTEXT_CHARS = 50

SCRAPER_VERSION = "1.0"

STOPWORDS = frozenset(
    {
        "a", "about", "above", "after", "again", "against", "all", "am", "an", "and",
        "any", "are", "as", "at", "be", "because", "been", "before", "being", "below",
        "between", "both", "but", "by", "can", "could", "did", "do", "does", "doing",
        "down", "during", "each", "few", "for", "from", "further", "had", "has", "have",
        "having", "he", "her", "here", "hers", "herself", "him", "himself", "his", "how",
        "i", "if", "in", "into", "is", "it", "its", "itself", "just", "me", "more",
        "most", "my", "myself", "no", "nor", "not", "now", "of", "off", "on", "once",
        "only", "or", "other", "our", "ours", "ourselves", "out", "over", "own", "same",
        "she", "should", "so", "some", "such", "than", "that", "the", "their", "theirs",
        "them", "themselves", "then", "there", "these", "they", "this", "those",
        "through", "to", "too", "under", "until", "up", "very", "was", "we", "were",
        "what", "when", "where", "which", "while", "who", "whom", "why", "will", "with",
        "would", "you", "your", "yours", "yourself", "yourselves",
    }
)
