from .user import User, BoardMembership
from .cohort import Cohort
from .candidate import Candidate
from .question import Question
from .trait import CharacterTrait
from .rating import Rating, RatingScore
from .setting import CohortSettings
# base and mixins are imported by the above as needed
