"""
API module for the Wind Airways proxy.

Provides REST endpoints for:
- Flights (ongoing, paged list, single flight, by date)
- Pilots (roster, batched lookup)
- Airline profile, statistics and fleet
- System status and cache administration
"""

from windair.api.airline import airline_bp
from windair.api.flights import flights_bp
from windair.api.pilots import pilots_bp
from windair.api.system import system_bp

__all__ = ['airline_bp', 'flights_bp', 'pilots_bp', 'system_bp']
