"""Auction logging and output."""

from gavel.logging.auction_log import AuctionLog, LogEntry, TeamResult
from gavel.logging.markdown_writer import MarkdownAuctionWriter

__all__ = ["AuctionLog", "LogEntry", "MarkdownAuctionWriter", "TeamResult"]
