"""Default heuristic tables for signal extraction.

These constants are fixed heuristics carried over from the record set's
long-standing estimates. They are exposed through ``SignalWeights`` so they
can be swapped without touching the extractor.
"""

# Time-series fields whose latest value counts towards estimated users
USER_MOST_RECENT_FIELDS: tuple[str, ...] = (
    "linkedInSkill",
    "subreddit memberCount",
    "projectEuler members",
)

# Plain numeric fields counted towards estimated users as-is
USER_DIRECT_FIELDS: tuple[str, ...] = (
    "meetup members",
    "githubRepo stars",
)

# field -> (constant, factor); contribution = constant + factor * value
USER_CUSTOM_WEIGHTS: dict[str, tuple[float, float]] = {
    "wikipedia": (20.0, 0.0),
    "packageRepository": (1000.0, 0.0),
    # ~95% bot traffic, ~1% of users visit the page daily: 100 * (views / 20)
    "wikipedia dailyPageViews": (0.0, 5.0),
    # linguist requires a minimum of 200 users to accept a grammar
    "linguistGrammarRepo": (200.0, 0.0),
    "codeMirror": (50.0, 0.0),
    "website": (1.0, 0.0),
    "githubRepo": (1.0, 0.0),
    "githubRepo forks": (0.0, 3.0),
    "annualReport": (1000.0, 0.0),
}

# Custom fields whose value is truncated to an integer before scaling
USER_TRUNCATED_FIELDS: frozenset[str] = frozenset({"wikipedia dailyPageViews"})

JOB_SKILL_FIELD: str = "linkedInSkill"
JOB_SKILL_RATIO: float = 0.01
JOB_BOARD_FIELD: str = "indeedJobs"
