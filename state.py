from typing import TypedDict, List, Optional

class AssessmentState(TypedDict, total=False):
    answers: List[int]                 # one score per answered question, in question order
    show_results: bool
    generation: int                    # bumped on every mutation; stale advice results are dropped
    previous_score: Optional[int]      # total of the last completed run, for "improved by" messages
    correlation_id: Optional[str]      # Correlation ID for request tracking
