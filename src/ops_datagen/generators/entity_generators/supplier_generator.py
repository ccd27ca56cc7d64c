"""
Supplier dimension generation.
"""

from ops_datagen.generators.distributions import (
    proportion_flag,
    uniform_decimal,
    uniform_int,
    weighted_choice,
)
from ops_datagen.shared.models import Supplier
from ops_datagen.sourcedata.default import SUPPLIER_NAME_PREFIXES, SUPPLIER_NAME_SUFFIXES

from .base_generator import BaseEntityGenerator


class SupplierGenerator(BaseEntityGenerator):
    """Generates suppliers with linked country/region pairs."""

    entity = "supplier"

    def generate(self, count: int) -> list[Supplier]:
        """
        Generate ``count`` suppliers.

        Country and region are drawn together from the location table so no
        impossible combination appears. ``is_local`` follows a fixed
        proportion pattern that hits ``local_supplier_ratio`` exactly.
        """
        self._check_count(count)
        locations = self.config.labels.supplier_locations
        self._require_labels("supplier_locations", locations)

        # Keyed by index so duplicate country rows stay distinct entries
        location_weights = {i: float(weight) for i, (_, _, weight) in enumerate(locations)}

        suppliers: list[Supplier] = []
        for index in range(count):
            country, region, _ = locations[weighted_choice(self.rng, location_weights)]
            suppliers.append(
                Supplier(
                    id=self.ids.allocate(),
                    name=self._supplier_name(),
                    country=country,
                    region=region,
                    rating=uniform_decimal(
                        self.rng, self.dist.rating_min, self.dist.rating_max, places=1
                    ),
                    lead_time_days=uniform_int(
                        self.rng,
                        self.dist.supplier_lead_time_min,
                        self.dist.supplier_lead_time_max,
                    ),
                    is_local=proportion_flag(index, self.dist.local_supplier_ratio),
                )
            )

        self._log_generated(suppliers)
        return suppliers

    def _supplier_name(self) -> str:
        prefix = weighted_choice(self.rng, SUPPLIER_NAME_PREFIXES)
        suffix = weighted_choice(self.rng, SUPPLIER_NAME_SUFFIXES)
        return f"{prefix} {suffix}"
