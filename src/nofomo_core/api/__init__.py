"""HTTP boundary of the decision engine."""
