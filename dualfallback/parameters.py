"""
Parameters class for the fallback computations
"""


class Parameters:
    """
    Configuration parameters for the fallback getters.

    Attributes
    ----------
    nearly_infeasible_is_ray : bool
        Treat a NEARLY_INFEASIBILITY_CERTIFICATE dual status as a ray, so the
        objective does not contribute to reconstructed duals (default: True)

    Examples
    --------
    >>> param = Parameters()
    >>> param.nearly_infeasible_is_ray = False
    """

    def __init__(self):
        self.nearly_infeasible_is_ray = True

    def __repr__(self):
        return (f"Parameters(nearly_infeasible_is_ray={self.nearly_infeasible_is_ray})")

    @classmethod
    def from_dict(cls, d):
        """Create Parameters from dictionary"""
        param = cls()
        for key, value in d.items():
            if hasattr(param, key):
                setattr(param, key, value)
        return param

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'nearly_infeasible_is_ray': self.nearly_infeasible_is_ray,
        }
