"""Wedding budget and savings dashboard.

Submodules:

* ``aggregation`` – budget totals, chart series and savings projections
  computed from record snapshots
* ``finance`` – loan instalments and funding progress for the finance tracker
* ``snapshots`` – exported database tables loaded into typed records
* ``visualization`` – Plotly figure builders
* ``dashboard`` – the Streamlit page (``streamlit run wedding_dashboard/dashboard.py``)
"""

from . import aggregation  # noqa: F401
from . import finance  # noqa: F401
from . import visualization  # noqa: F401

# The aggregation functions are usable without Streamlit installed.
try:
    from . import dashboard  # type: ignore  # noqa: F401
except ModuleNotFoundError:
    dashboard = None  # type: ignore


__all__ = ["aggregation", "finance", "visualization", "dashboard"]
