"""
Test suite for the simulated clock
"""

import pytest

from banksim.clock import SimulationClock


class TestSimulationClock:
    """Test SimulationClock"""
    
    def test_defaults(self):
        clock = SimulationClock()
        
        assert clock.now() == 0
        assert clock.month_duration == 30
    
    def test_advance(self):
        clock = SimulationClock(start=10)
        
        assert clock.advance() == 11
        assert clock.advance(5) == 16
        assert clock.advance(0) == 16
        assert clock.now() == 16
    
    def test_cannot_go_backwards(self):
        clock = SimulationClock(start=3)
        
        with pytest.raises(ValueError, match="backwards"):
            clock.advance(-1)
        assert clock.now() == 3
    
    def test_invalid_construction(self):
        with pytest.raises(ValueError):
            SimulationClock(start=-1)
        with pytest.raises(ValueError):
            SimulationClock(month_duration=0)
    
    def test_month_boundary(self):
        clock = SimulationClock(month_duration=7)
        
        assert clock.is_month_boundary(0)
        assert clock.is_month_boundary(14)
        assert not clock.is_month_boundary(15)
