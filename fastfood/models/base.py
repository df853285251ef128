from sqlalchemy.orm import declarative_base

Base = declarative_base()


def enum_values(enum_cls):
    """Persist enum values ("ordered") rather than member names ("ORDERED")."""
    return [member.value for member in enum_cls]
