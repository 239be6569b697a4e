"""
Ranking engine: comparison sorts and top-N queries over record snapshots.

Modules
-------
comparators : Comparator type + by_volume / by_open_price / by_field / reverse.
algorithms  : bubble_sort, selection_sort, merge_sort, quick_sort
              + SORT_ALGORITHMS registry: pure, in-place, self-timing.
ranker      : RankingResult + rank_records() / top_n() / compare_algorithms().
"""
