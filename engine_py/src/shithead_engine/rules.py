"""
Game rule configuration and validation.
"""

from pydantic import BaseModel, Field, field_validator


class RuleConfig(BaseModel):
    """Configuration for game rules and settings."""

    min_players: int = Field(
        default=2,
        ge=2,
        le=4,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=4,
        ge=2,
        le=4,
        description="Maximum number of players allowed"
    )
    turn_timeout: float = Field(
        default=30.0,
        gt=0,
        le=120,
        description="Turn timeout in seconds before the pile is taken automatically"
    )
    heartbeat_interval: float = Field(
        default=1.0,
        gt=0,
        le=10,
        description="Seconds between remaining-time updates"
    )
    game_id_length: int = Field(
        default=6,
        ge=4,
        le=12,
        description="Length of generated game ids"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't go below minimum."""
        min_players = info.data.get('min_players', 2)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        return self.min_players <= player_count <= self.max_players


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
