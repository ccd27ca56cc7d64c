"""
Configuration models for the operations data generator.

These models define the structure, defaults and validation of the JSON
configuration file. Every distribution parameter the generators use lives
here so that a run is fully described by its config and seed.
"""

import json
import logging
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..shared.exceptions import ConfigurationError
from ..sourcedata import default as defaults

logger = logging.getLogger(__name__)

# Smallest positive amount that survives quantization to cents
MIN_MONEY_AMOUNT = 0.01


class PricePolicy(str, Enum):
    """How product unit_price relates to unit_cost."""

    INDEPENDENT = "independent"  # sampled separately; loss-making products possible
    MARKUP = "markup"  # price = cost * markup, always above cost


class DeliveryPolicy(str, Enum):
    """How actual_delivery_date is derived for purchase orders."""

    ANCHORED = "anchored"  # derived from the order's own expected date
    RESAMPLE = "resample"  # legacy: derived from a freshly sampled order date


class PeriodConfig(BaseModel):
    """Configuration for the generated date range."""

    start: date = Field(date(2023, 1, 1), description="First day of the period")
    end: date = Field(date(2024, 12, 31), description="Last day of the period")
    as_of: date | None = Field(
        None,
        description="Reporting date; deliveries after it are still in transit (defaults to end)",
    )

    @model_validator(mode="after")
    def validate_range(self) -> "PeriodConfig":
        """Validate that the period is not inverted."""
        if self.end < self.start:
            raise ValueError("Period end must be on or after period start")
        return self

    @property
    def reporting_date(self) -> date:
        return self.as_of or self.end


class VolumeConfig(BaseModel):
    """Target row counts per generated entity."""

    products: int = Field(50, ge=0, description="Number of products to generate")
    suppliers: int = Field(10, ge=0, description="Number of suppliers to generate")
    purchase_orders: int = Field(
        500, ge=0, description="Number of purchase orders to generate"
    )
    sales: int = Field(2000, ge=0, description="Number of sales to generate")
    expenses: int = Field(800, ge=0, description="Number of expenses to generate")
    inventory_snapshots: int = Field(
        300, ge=0, description="Number of inventory snapshots to generate"
    )


class LabelsConfig(BaseModel):
    """Fixed label sets and weight tables."""

    product_categories: list[str] = Field(
        default_factory=lambda: list(defaults.PRODUCT_CATEGORIES),
        description="Product categories, cycled across generated products",
    )
    supplier_locations: list[tuple[str, str, float]] = Field(
        default_factory=lambda: list(defaults.SUPPLIER_LOCATIONS),
        description="(country, region, weight) rows sampled as linked pairs",
    )
    sales_regions: dict[str, float] = Field(
        default_factory=lambda: dict(defaults.SALES_REGIONS),
        description="Sales region weights",
    )
    departments: list[str] = Field(
        default_factory=lambda: list(defaults.DEPARTMENTS),
        description="Departments for expenses and budgets",
    )
    expense_categories: dict[str, float] = Field(
        default_factory=lambda: dict(defaults.EXPENSE_CATEGORIES),
        description="Expense category weights",
    )
    expense_types: dict[str, float] = Field(
        default_factory=lambda: dict(defaults.EXPENSE_TYPES),
        description="Expense type weights",
    )

    @field_validator("departments")
    @classmethod
    def validate_unique_departments(cls, v: list[str]) -> list[str]:
        """Budget rows are keyed by department, so names must be unique."""
        if len(set(v)) != len(v):
            raise ValueError("Department names must be unique")
        return v


class DistributionConfig(BaseModel):
    """Distribution parameters (probabilities and bounds)."""

    p_ontime: float = Field(
        0.85, ge=0.0, le=1.0, description="Probability a purchase order arrives on schedule"
    )
    p_small_basket: float = Field(
        0.70, ge=0.0, le=1.0, description="Probability a sale is a small basket"
    )

    lead_days_min: int = Field(2, ge=0, description="Minimum order-to-expected days")
    lead_days_max: int = Field(46, ge=0, description="Maximum order-to-expected days")
    delay_days_min: int = Field(1, ge=1, description="Minimum extra days when delayed")
    delay_days_max: int = Field(12, ge=1, description="Maximum extra days when delayed")

    small_basket_min: int = Field(1, gt=0, description="Minimum small-basket quantity")
    small_basket_max: int = Field(5, gt=0, description="Maximum small-basket quantity")
    bulk_basket_min: int = Field(6, gt=0, description="Minimum bulk-basket quantity")
    bulk_basket_max: int = Field(45, gt=0, description="Maximum bulk-basket quantity")

    order_quantity_min: int = Field(10, gt=0, description="Minimum units per purchase order")
    order_quantity_max: int = Field(500, gt=0, description="Maximum units per purchase order")

    unit_cost_min: float = Field(5.0, gt=0.0, description="Minimum product unit cost")
    unit_cost_max: float = Field(200.0, gt=0.0, description="Maximum product unit cost")
    unit_price_min: float = Field(10.0, gt=0.0, description="Minimum product unit price")
    unit_price_max: float = Field(400.0, gt=0.0, description="Maximum product unit price")
    markup_min: float = Field(1.10, gt=1.0, description="Minimum markup under the markup policy")
    markup_max: float = Field(1.80, gt=1.0, description="Maximum markup under the markup policy")

    rating_min: float = Field(1.0, ge=1.0, le=5.0, description="Minimum supplier rating")
    rating_max: float = Field(5.0, ge=1.0, le=5.0, description="Maximum supplier rating")
    supplier_lead_time_min: int = Field(3, gt=0, description="Minimum supplier lead time")
    supplier_lead_time_max: int = Field(30, gt=0, description="Maximum supplier lead time")
    local_supplier_ratio: float = Field(
        0.30, ge=0.0, le=1.0, description="Target share of local suppliers"
    )

    expense_amount_min: float = Field(50.0, gt=0.0, description="Minimum expense amount")
    expense_amount_max: float = Field(5000.0, gt=0.0, description="Maximum expense amount")

    stock_min: int = Field(0, ge=0, description="Minimum stock on hand")
    stock_max: int = Field(1000, ge=0, description="Maximum stock on hand")
    reorder_level_min: int = Field(10, ge=0, description="Minimum reorder level")
    reorder_level_max: int = Field(150, ge=0, description="Maximum reorder level")

    budget_min: float = Field(10000.0, ge=0.0, description="Minimum monthly budget")
    budget_max: float = Field(50000.0, ge=0.0, description="Maximum monthly budget")
    spend_ratio_min: float = Field(0.80, ge=0.0, description="Minimum actual/budget ratio")
    spend_ratio_max: float = Field(1.20, ge=0.0, description="Maximum actual/budget ratio")

    @model_validator(mode="after")
    def validate_bounds(self) -> "DistributionConfig":
        """Validate that every min/max pair is ordered."""
        pairs = [
            ("lead_days", self.lead_days_min, self.lead_days_max),
            ("delay_days", self.delay_days_min, self.delay_days_max),
            ("small_basket", self.small_basket_min, self.small_basket_max),
            ("bulk_basket", self.bulk_basket_min, self.bulk_basket_max),
            ("order_quantity", self.order_quantity_min, self.order_quantity_max),
            ("unit_cost", self.unit_cost_min, self.unit_cost_max),
            ("unit_price", self.unit_price_min, self.unit_price_max),
            ("markup", self.markup_min, self.markup_max),
            ("rating", self.rating_min, self.rating_max),
            ("supplier_lead_time", self.supplier_lead_time_min, self.supplier_lead_time_max),
            ("expense_amount", self.expense_amount_min, self.expense_amount_max),
            ("stock", self.stock_min, self.stock_max),
            ("reorder_level", self.reorder_level_min, self.reorder_level_max),
            ("budget", self.budget_min, self.budget_max),
            ("spend_ratio", self.spend_ratio_min, self.spend_ratio_max),
        ]
        for name, lo, hi in pairs:
            if lo > hi:
                raise ValueError(f"{name}_min must be <= {name}_max (got {lo} > {hi})")

        # Sampled money is quantized to cents; a smaller minimum can round to zero
        positive_money = [
            ("unit_cost_min", self.unit_cost_min),
            ("unit_price_min", self.unit_price_min),
            ("expense_amount_min", self.expense_amount_min),
        ]
        for name, value in positive_money:
            if value < MIN_MONEY_AMOUNT:
                raise ValueError(f"{name} must be at least {MIN_MONEY_AMOUNT} (got {value})")
        return self


class PerformanceConfig(BaseModel):
    """Configuration for parallel generation."""

    parallel: bool = Field(
        True, description="Generate independent entity collections in parallel"
    )
    max_workers: int | None = Field(
        None,
        gt=0,
        description="Override maximum number of parallel workers. If None, uses CPU count.",
    )

    def get_max_workers(self) -> int:
        """Number of workers used for independent generators."""
        import os

        if not self.parallel:
            return 1
        if self.max_workers is not None:
            return self.max_workers
        return max(1, min(4, os.cpu_count() or 1))


class GenerationConfig(BaseModel):
    """Main configuration model for the operations data generator."""

    seed: int = Field(
        42,
        ge=0,
        le=2**32 - 1,
        description="Random seed for reproducible data generation",
    )
    period: PeriodConfig = Field(
        default_factory=PeriodConfig, description="Generated date range"
    )
    volume: VolumeConfig = Field(
        default_factory=VolumeConfig, description="Row counts per entity"
    )
    labels: LabelsConfig = Field(
        default_factory=LabelsConfig, description="Label sets and weight tables"
    )
    distributions: DistributionConfig = Field(
        default_factory=DistributionConfig, description="Distribution parameters"
    )
    price_policy: PricePolicy = Field(
        PricePolicy.INDEPENDENT,
        description="Whether unit_price is sampled independently of unit_cost",
    )
    delivery_policy: DeliveryPolicy = Field(
        DeliveryPolicy.ANCHORED,
        description="How actual delivery dates are derived",
    )
    performance: PerformanceConfig = Field(
        default_factory=PerformanceConfig, description="Parallelism settings"
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenerationConfig":
        """
        Build a configuration from a plain mapping.

        Raises:
            ConfigurationError: If the mapping does not match the schema
        """
        try:
            return cls(**data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            first_field = ".".join(str(p) for p in e.errors()[0]["loc"]) if errors else None
            raise ConfigurationError(
                "Invalid generation configuration",
                field=first_field,
                validation_errors=errors,
            ) from e

    @classmethod
    def from_file(cls, file_path: str | Path) -> "GenerationConfig":
        """
        Load configuration from a JSON file.

        Args:
            file_path: Path to the configuration JSON file

        Returns:
            GenerationConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the JSON is invalid or doesn't match the schema
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            with path.open("r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file: {e}") from e

        logger.info(f"Loaded configuration from {path}")
        return cls.from_dict(data)

    def to_file(self, file_path: str | Path) -> None:
        """
        Save configuration to a JSON file.

        Args:
            file_path: Path where to save the configuration file
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)


# Alias for test imports
Config = GenerationConfig
