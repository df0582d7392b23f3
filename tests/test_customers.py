"""
Test suite for customers module

Tests client records, privilege ordering and the information each privilege
level requires.
"""

import pytest

from banksim.customers import Client, PrivilegeLevel, check_client_requirements


class TestPrivilegeLevel:
    """Test privilege level ordering"""
    
    def test_levels_ordered(self):
        assert PrivilegeLevel.INITIAL < PrivilegeLevel.INTERMEDIATE < PrivilegeLevel.FULL
    
    def test_int_level_converted(self):
        client = Client("Ada", "Lovelace", address="London", privilege_level=1)
        
        assert client.privilege_level is PrivilegeLevel.INTERMEDIATE
    
    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            Client("Ada", "Lovelace", privilege_level=7)


class TestClient:
    """Test Client record"""
    
    def test_defaults(self):
        client = Client("John", "Doe")
        
        assert client.address is None
        assert client.passport is None
        assert client.privilege_level == PrivilegeLevel.INITIAL
        assert client.full_name == "John Doe"


class TestClientRequirements:
    """Test information requirements per privilege level"""
    
    def test_initial_needs_nothing(self):
        assert check_client_requirements(Client("John", "Doe"))
    
    def test_intermediate_needs_address(self):
        assert not check_client_requirements(
            Client("John", "Doe", privilege_level=PrivilegeLevel.INTERMEDIATE)
        )
        assert check_client_requirements(
            Client("John", "Doe", address="1 Main St", privilege_level=PrivilegeLevel.INTERMEDIATE)
        )
    
    def test_full_needs_passport_and_address(self):
        """Test that FULL requirements include the INTERMEDIATE ones"""
        passport_only = Client("John", "Doe", passport="X123", privilege_level=PrivilegeLevel.FULL)
        address_only = Client("John", "Doe", address="1 Main St", privilege_level=PrivilegeLevel.FULL)
        both = Client(
            "John", "Doe", address="1 Main St", passport="X123",
            privilege_level=PrivilegeLevel.FULL
        )
        
        assert not check_client_requirements(passport_only)
        assert not check_client_requirements(address_only)
        assert check_client_requirements(both)
        assert both.meets_requirements
