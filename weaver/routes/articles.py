"""
Article routes: listing, updates, summaries, embeddings and similarity search.
"""

from fastapi import APIRouter, Query

from ..schemas import (
    ArticleListResponse,
    ArticleResponse,
    BatchEmbeddingRequest,
    BatchEmbeddingResponse,
    EmbeddingResponse,
    EmbeddingStatsResponse,
    SearchRequest,
    SearchResponse,
    SearchResultResponse,
    SimilarArticlesResponse,
    SummaryResponse,
    UpdateArticleRequest,
)
from ..search import SearchResult
from ..services import ArticleServiceDep

router = APIRouter(prefix="/articles", tags=["articles"])


def _result_response(result: SearchResult) -> SearchResultResponse:
    return SearchResultResponse(
        article_id=result.article_id,
        score=result.score,
        title=result.title,
        snippet=result.snippet,
        category=result.category,
        published_at=result.published_at.isoformat(),
    )


# ─────────────────────────────────────────────────────────────
# List, Search & Embeddings (static paths first)
# ─────────────────────────────────────────────────────────────

@router.get("")
async def list_articles(
    service: ArticleServiceDep,
    category: str | None = None,
    status: str | None = None,
    feed_id: str | None = Query(default=None, alias="feedId"),
    limit: int | None = Query(default=None, ge=1),
    offset: int | None = Query(default=None, ge=0)
) -> ArticleListResponse:
    """Get non-archived articles, newest first.

    Args:
        status: "read" or "unread"; other values are ignored.
    """
    articles, total = service.list_articles(
        category=category,
        status=status,
        feed_id=feed_id,
        limit=limit,
        offset=offset,
    )
    return ArticleListResponse(
        articles=[ArticleResponse.from_db(a) for a in articles],
        total=total,
    )


@router.post("/search")
async def search_articles(request: SearchRequest, service: ArticleServiceDep) -> SearchResponse:
    """Rank articles against a free-text query."""
    results = await service.search(request.query, request.limit)
    return SearchResponse(
        results=[_result_response(r) for r in results],
        total=len(results),
        query=request.query,
    )


@router.post("/embeddings/batch")
async def batch_embeddings(
    service: ArticleServiceDep,
    request: BatchEmbeddingRequest | None = None
) -> BatchEmbeddingResponse:
    """Embed the newest articles that have no embedding yet."""
    limit = request.limit if request else 50
    result = await service.batch_embeddings(limit)
    return BatchEmbeddingResponse(
        success=True,
        processed=result.processed,
        errors=result.errors,
        message=f"Generated embeddings for {result.processed} articles with {result.errors} errors",
    )


@router.get("/embeddings/stats")
async def embedding_stats(service: ArticleServiceDep) -> EmbeddingStatsResponse:
    return EmbeddingStatsResponse(**service.embedding_stats())


# ─────────────────────────────────────────────────────────────
# Single Article
# ─────────────────────────────────────────────────────────────

@router.get("/{article_id}")
async def get_article(article_id: str, service: ArticleServiceDep) -> ArticleResponse:
    return ArticleResponse.from_db(service.get_article(article_id))


@router.patch("/{article_id}")
async def update_article(
    article_id: str,
    request: UpdateArticleRequest,
    service: ArticleServiceDep
) -> ArticleResponse:
    """Mark read/archived or store a summary or analysis."""
    article = service.update_article(article_id, request.model_dump(exclude_unset=True))
    return ArticleResponse.from_db(article)


@router.post("/{article_id}/summarize")
async def summarize_article(article_id: str, service: ArticleServiceDep) -> SummaryResponse:
    """Return the stored summary or generate one."""
    summary, cached = await service.summarize(article_id)
    return SummaryResponse(summary=summary, cached=cached)


@router.post("/{article_id}/embedding")
async def generate_embedding(article_id: str, service: ArticleServiceDep) -> EmbeddingResponse:
    cached = await service.generate_embedding(article_id)
    return EmbeddingResponse(
        success=True,
        cached=cached,
        message="Embedding already exists" if cached else "Embedding generated and stored",
    )


@router.get("/{article_id}/similar")
async def similar_articles(
    article_id: str,
    service: ArticleServiceDep,
    limit: int = Query(default=5, ge=1, le=50)
) -> SimilarArticlesResponse:
    """Articles most similar to this one, excluding itself."""
    results = await service.find_similar(article_id, limit)
    return SimilarArticlesResponse(
        results=[_result_response(r) for r in results],
        total=len(results),
        article_id=article_id,
    )
