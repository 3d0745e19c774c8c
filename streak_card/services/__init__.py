"""
Services package for the streak card generator.

Contains the orchestration of a generation run and the publishing of
its output.
"""

from streak_card.services.card_generator import GenerationResult, generate_card
from streak_card.services.card_publisher import FilesystemPublisher

__all__ = ["FilesystemPublisher", "GenerationResult", "generate_card"]
