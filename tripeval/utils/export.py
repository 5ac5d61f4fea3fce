"""
Report export.

Flattens rating distributions and supplier rankings into CSV tables,
with a JSON metadata file alongside each table.
"""

import json
import logging
import os
import re
from datetime import datetime, timezone

import pandas as pd

import config.settings as settings
from tripeval.models.distribution import RatingDistribution, SupplierSearchResult

logger = logging.getLogger(__name__)


class ReportWriter:
    """Writes query results as CSV + metadata JSON."""

    def __init__(self, output_dir: str):
        self.output_dir = output_dir

    def distribution_frame(self, distribution: RatingDistribution) -> pd.DataFrame:
        """
        One row per category with a count column per rating.

        Columns: Category, Total, 1..10, Average
        """
        rows = []
        for category in distribution.categories:
            row = {'Category': category.category, 'Total': category.total_responses}
            for bucket in category.distribution:
                row[str(bucket.rating)] = bucket.count
            row['Average'] = category.average_rating
            rows.append(row)

        rating_columns = [
            str(r) for r in range(settings.MIN_RATING, settings.MAX_RATING + 1)
        ]
        # Average comes from the raw ratings; off-bucket values have no count column
        return pd.DataFrame(rows, columns=['Category', 'Total'] + rating_columns + ['Average'])

    def supplier_frame(self, result: SupplierSearchResult) -> pd.DataFrame:
        """One row per supplier, ranked by average rating within each country."""
        rows = []
        for group in result.results:
            for rank, supplier in enumerate(group.suppliers, 1):
                rows.append({
                    'Country': group.country,
                    'Rank': rank,
                    'Supplier': supplier.name,
                    'Average': supplier.average_rating,
                    'Evaluations': supplier.total_evaluations,
                    'Locations': supplier.location,
                })
        return pd.DataFrame(
            rows,
            columns=['Country', 'Rank', 'Supplier', 'Average', 'Evaluations', 'Locations']
        )

    def write_distribution(self, distribution: RatingDistribution) -> str:
        """
        Save a trip distribution table.

        Returns:
            Path to the generated CSV file
        """
        df = self.distribution_frame(distribution)
        name = f"distribution_{_slug(distribution.search_id)}_{_slug(distribution.survey_type)}"
        return self._write(df, name, {
            "search_id": distribution.search_id,
            "survey_type": distribution.survey_type,
            "total_categories": len(df),
        })

    def write_suppliers(self, result: SupplierSearchResult) -> str:
        """
        Save a supplier ranking table.

        Returns:
            Path to the generated CSV file
        """
        df = self.supplier_frame(result)
        name = f"suppliers_{_slug(result.supplier_type)}_{_slug(result.location)}"
        return self._write(df, name, {
            "supplier_type": result.supplier_type,
            "search_term": result.location,
            "countries": [group.country for group in result.results],
            "total_suppliers": len(df),
        })

    def _write(self, df: pd.DataFrame, name: str, metadata: dict) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        output_path = os.path.join(self.output_dir, f"{name}.csv")
        df.to_csv(output_path, index=False)
        logger.info(f"Report saved to {output_path} ({len(df)} rows)")

        metadata_path = os.path.join(self.output_dir, f"{name}_metadata.json")
        metadata["generated_at"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        with open(metadata_path, 'w', encoding='utf-8') as f:
            json.dump(metadata, f, indent=2, ensure_ascii=False)

        logger.info(f"Metadata saved to {metadata_path}")
        return output_path


def _slug(text: str) -> str:
    """File-name safe version of a free-text value."""
    return re.sub(r'[^\w]+', '-', text.strip().lower()).strip('-') or "all"
