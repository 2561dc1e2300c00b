"""Constants for the ranker module."""

COMPONENT_RANKER = "ranker"

# Number of worst-performing dimensions left out of an entity's total rank
DROPPED_WORST_DIMENSIONS: int = 1

RANK_DEBUG_TEMPLATE: str = (
    "TotalRank: {total_rank} Jobs: {jobs_rank} Users: {users_rank} "
    "Facts: {facts_rank} Links: {inbound_links_rank}"
)
