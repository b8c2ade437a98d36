from biblioteca.models.author import Author
from biblioteca.models.book import Book

__all__ = ["Author", "Book"]
