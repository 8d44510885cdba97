# /gradeflow/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that the Base class knows about them
# when `init_db` or Alembic scans the metadata.

# Import the Base class that all models inherit from.
from .base_class import Base

# Import all of our model classes from their respective files.
from .models.user_models import User
from .models.task_models import Task
from .models.poll_models import Poll, PollOption, PollVote
from .models.ticket_models import SupportTicket
