from app.db.session import executor, create_db_and_tables
from app.models.blog import Blog  # noqa: F401 (registers the table)
from app.routers.blogs import BlogCreate
from app.services.blog import BlogService

def seed_blogs():
    print("Creating database and tables...")
    create_db_and_tables()

    service = BlogService(executor)

    # Check if posts already exist to avoid duplicates
    existing = service.list_outlines(status="", limit=1)
    if existing:
        print("Database already contains blog posts. Skipping seed.")
        return

    print("Seeding initial blog posts...")
    posts = [
        {
            "slug": "running-a-pub-first-year",
            "title": "Running a Pub: Your First Year",
            "excerpt": "What nobody tells you about the first twelve months behind the bar.",
            "content_md": "# Your first year\n\nStock takes, staff rotas and the cellar.",
            "content_html": "<h1>Your first year</h1><p>Stock takes, staff rotas and the cellar.</p>",
            "status": "published",
            "published_at": "2024-06-01T09:00:00+00:00",
            "reading_time_minutes": 6,
            "faq_json": [{"question": "How long until a pub is profitable?", "answer": "Usually 12-18 months."}],
        },
        {
            "slug": "fish-and-chips-special",
            "title": "The Fish and Chips Special",
            "excerpt": "How a Friday menu turned into the busiest night of the week.",
            "content_md": "Friday nights used to be quiet.",
            "content_html": "<p>Friday nights used to be quiet.</p>",
            "status": "published",
            "published_at": "2024-01-01T12:00:00+00:00",
            "reading_time_minutes": 4,
        },
        {
            "slug": "cellar-management-basics",
            "title": "Cellar Management Basics",
            "excerpt": "Line cleaning, temperatures and keeping cask ale at its best.",
            "content_md": "Keep it at 11-13C.",
            "content_html": "<p>Keep it at 11-13C.</p>",
            "status": "draft",
        },
    ]

    for post in posts:
        service.create(BlogCreate(**post).model_dump(by_alias=True, exclude={"upload_password"}))

    print(f"Successfully seeded {len(posts)} blog posts!")

if __name__ == "__main__":
    seed_blogs()
