"""Blog content repository for the records the summarize endpoint persists."""
from typing import Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase
from api.models.blog_content import BlogContentModel
from shared.utils import get_utc_now


class BlogContentRepository:
    """Repository for the blog_content collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.blog_content

    async def save_scraped_content(
        self,
        blog_url: str,
        title: str,
        content: str,
        author: Optional[str] = None,
        published_date: Optional[str] = None
    ) -> Dict[str, Any]:
        """Insert or refresh the record for a blog URL."""
        record = {
            "blog_url": blog_url,
            "title": title,
            "content": content,
            "scraped_at": get_utc_now(),
            "word_count": len(content.split()),
            "author": author,
            "published_date": published_date
        }
        await self.collection.update_one(
            {"blog_url": blog_url},
            {"$set": record},
            upsert=True
        )
        return record

    async def get_by_url(self, blog_url: str) -> Optional[BlogContentModel]:
        """Get the record for a blog URL."""
        document = await self.collection.find_one({"blog_url": blog_url})
        if document is None:
            return None
        return BlogContentModel.model_validate(document)

    async def list_recent(self, limit: int = 20) -> List[BlogContentModel]:
        """List records, most recently scraped first."""
        cursor = self.collection.find().sort("scraped_at", -1).limit(limit)
        documents = await cursor.to_list(length=limit)
        return [BlogContentModel.model_validate(document) for document in documents]
