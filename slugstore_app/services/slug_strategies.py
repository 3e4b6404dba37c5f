"""
Slug generation strategies.
Uses Strategy Pattern so tests can plug in a deterministic generator.
"""

import secrets
import string
from abc import ABC, abstractmethod


class SlugStrategy(ABC):
    """Abstract base class for slug generation strategies"""
    
    @abstractmethod
    def generate(self) -> str:
        """
        Generate a candidate slug.
        
        Uniqueness is not guaranteed here; the service checks the store
        and asks for another candidate on collision.
        """
        pass


class RandomBase36SlugStrategy(SlugStrategy):
    """
    Random slug of lowercase letters and digits.
    
    7 characters give 36^7 (about 78 billion) slugs, so collisions
    are rare and the retry loop almost always succeeds first time.
    """
    
    ALPHABET = string.digits + string.ascii_lowercase
    
    def __init__(self, length: int = 7):
        if length < 1:
            raise ValueError(f"Slug length must be positive, got {length}")
        self.length = length
    
    def generate(self) -> str:
        return ''.join(secrets.choice(self.ALPHABET) for _ in range(self.length))
