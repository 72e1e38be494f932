from enum import Enum


class EvidenceTier(str, Enum):
    TIER_0 = "TIER_0"  # Self-declared
    TIER_1 = "TIER_1"  # Policy documents
    TIER_2 = "TIER_2"  # System-generated


class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Priority(str, Enum):
    IMMEDIATE = "IMMEDIATE"
    SHORT_TERM = "SHORT_TERM"
    MEDIUM_TERM = "MEDIUM_TERM"
    LONG_TERM = "LONG_TERM"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class RiskCategory(str, Enum):
    GEOGRAPHIC = "GEOGRAPHIC"
    TRANSACTION = "TRANSACTION"
    GOVERNANCE = "GOVERNANCE"
    OPERATIONAL = "OPERATIONAL"
    REGULATORY = "REGULATORY"
    REPUTATIONAL = "REPUTATIONAL"


class Likelihood(str, Enum):
    RARE = "RARE"
    UNLIKELY = "UNLIKELY"
    POSSIBLE = "POSSIBLE"
    LIKELY = "LIKELY"
    CERTAIN = "CERTAIN"


class Impact(str, Enum):
    NEGLIGIBLE = "NEGLIGIBLE"
    MINOR = "MINOR"
    MODERATE = "MODERATE"
    MAJOR = "MAJOR"
    CATASTROPHIC = "CATASTROPHIC"


class EffortRange(str, Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class CostRange(str, Enum):
    """Budget buckets shared by gap cost estimates, vendor pricing and org budgets."""
    UNDER_10K = "UNDER_10K"
    RANGE_10K_50K = "RANGE_10K_50K"
    RANGE_50K_100K = "RANGE_50K_100K"
    RANGE_100K_250K = "RANGE_100K_250K"
    OVER_250K = "OVER_250K"


class CompanySize(str, Enum):
    # Declaration order is the size scale used for adjacency
    STARTUP = "STARTUP"
    SMB = "SMB"
    MIDMARKET = "MIDMARKET"
    ENTERPRISE = "ENTERPRISE"


class DeploymentPreference(str, Enum):
    CLOUD = "CLOUD"
    ON_PREMISE = "ON_PREMISE"
    HYBRID = "HYBRID"
    FLEXIBLE = "FLEXIBLE"


class ImplementationUrgency(str, Enum):
    IMMEDIATE = "IMMEDIATE"
    PLANNED = "PLANNED"
    STRATEGIC = "STRATEGIC"
    LONG_TERM = "LONG_TERM"


class RiskBand(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class Methodology(str, Enum):
    COMPLETE = "complete"
    PARTIAL = "partial"


class Timeline(str, Enum):
    IMMEDIATE = "immediate"
    NEAR_TERM = "nearTerm"
    STRATEGIC = "strategic"
