"""Markdown auction summary writer."""

from datetime import datetime
from pathlib import Path
from typing import TextIO

from gavel.core.enums import ROLE_ORDER
from gavel.core.models.state import AuctionState
from gavel.logging.auction_log import AuctionLog


class MarkdownAuctionWriter:
    """Generates markdown auction summaries."""

    def write_auction_summary(
        self,
        state: AuctionState,
        auction_log: AuctionLog,
        output_path: Path,
    ) -> None:
        """
        Write complete auction summary to markdown file.

        Args:
            state: Final auction state
            auction_log: Log of all lot results
            output_path: Path to write markdown file
        """
        with open(output_path, "w") as f:
            f.write(self.generate_summary_string(state, auction_log))
            self._write_footer(f)

    def generate_summary_string(self, state: AuctionState, auction_log: AuctionLog) -> str:
        """Generate markdown summary as a string."""
        lines = []

        lines.append("# Auction Results")
        lines.append("")
        lines.append(f"**Lots:** {state.catalog_size} | **Sold:** {len(state.sold)} | "
                     f"**Unsold:** {len(state.unsold)} | **Spent:** {auction_log.total_spent}L")
        lines.append("")

        lines.append("## Squads")
        lines.append("")
        role_headers = " | ".join(role.value for role in ROLE_ORDER)
        lines.append(f"| Team | Players | {role_headers} | Overseas | Spent | Purse Left |")
        lines.append("|------|:---:|" + ":---:|" * len(ROLE_ORDER) + ":---:|:---:|:---:|")
        for participant in state.participants:
            counts = participant.role_counts()
            role_cells = " | ".join(str(counts[role]) for role in ROLE_ORDER)
            marker = " *" if participant.is_user else ""
            lines.append(
                f"| {participant.team_id}{marker} | {participant.roster_size} | {role_cells} | "
                f"{participant.overseas_count} | {participant.total_spent} | {participant.purse} |"
            )
        lines.append("")

        lines.append("## Top Buys")
        lines.append("")
        top = auction_log.top_buys()
        if not top:
            lines.append("*No lots sold*")
        for entry in top:
            lines.append(f"- **{entry.lot_name}** ({entry.role.value}) to {entry.buyer_id} "
                         f"for {entry.price}L (base {entry.base_price}L, {entry.bid_count} bids)")
        lines.append("")

        return "\n".join(lines)

    def _write_footer(self, f: TextIO) -> None:
        """Write footer."""
        f.write("---\n")
        f.write(f"*Generated by Gavel Auction Simulator - {datetime.now().strftime('%Y-%m-%d %H:%M')}*\n")
