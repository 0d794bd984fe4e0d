"""NoFOMO decision engine: impulse scoring, verdicts and the decision audit log."""

__version__ = "0.1.0"
