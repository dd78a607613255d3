"""Auction decision core."""
