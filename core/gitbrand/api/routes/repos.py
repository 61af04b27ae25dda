"""Repository API routes: scan, score, narratives and README commits."""

from fastapi import APIRouter, HTTPException

from gitbrand.api.orchestrator_store import get_orchestrator
from gitbrand.api.schemas import (
    GenerationRequest,
    GenerationResponse,
    ReadmeCommitRequest,
    RepositorySchema,
    ScoreResponse,
    SuccessResponse,
)
from gitbrand.config import DEFAULT_COMMIT_MESSAGE, README_PATH
from gitbrand.engine.orchestrator import BrandingOrchestrator
from gitbrand.engine.prompts import build_social_prompt, build_storyteller_prompt
from gitbrand.engine.providers import generate_narrative
from gitbrand.errors import AuthError, GitBrandError
from gitbrand.github.client import Repository
from gitbrand.portfolio.scoring import calculate_repo_score
from gitbrand.utils.logging import logger

router = APIRouter(prefix="/repos", tags=["repos"])


async def _require_repo(name: str) -> tuple[BrandingOrchestrator, Repository]:
    orch = await get_orchestrator()
    repo = orch.portfolio.get_repository(name)
    if not repo:
        raise HTTPException(status_code=404, detail=f"Repository not found: {name}")
    return orch, repo


@router.get("", response_model=list[RepositorySchema])
async def list_repositories():
    """Cached repository list."""
    orch = await get_orchestrator()
    return [repo.to_dict() for repo in orch.portfolio.repositories]


@router.post("/scan", response_model=list[RepositorySchema])
async def scan_repositories():
    """Re-list repositories from GitHub."""
    orch = await get_orchestrator()
    try:
        repos = await orch.portfolio.refresh_repositories(orch.context)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=f"GitHub token required in Settings: {e}")
    return [repo.to_dict() for repo in repos]


@router.get("/{name}/tree")
async def get_tree(name: str):
    orch, _ = await _require_repo(name)
    ctx = orch.context
    tree = await orch.github.get_file_tree(ctx.github_token, ctx.account, name)
    return {"tree": tree or []}


@router.get("/{name}/score", response_model=ScoreResponse)
async def get_score(name: str):
    orch, repo = await _require_repo(name)
    ctx = orch.context
    tree = await orch.github.get_file_tree(ctx.github_token, ctx.account, name)
    return calculate_repo_score(repo, tree).to_dict()


@router.post("/{name}/narrative", response_model=GenerationResponse)
async def generate_repo_narrative(name: str, request: GenerationRequest):
    """Draft a quality-engineering narrative from the tree and README."""
    orch, repo = await _require_repo(name)
    ctx = orch.context
    tree = await orch.github.get_file_tree(ctx.github_token, ctx.account, name)
    readme = await orch.github.read_readme(ctx.github_token, ctx.account, name)

    prompt = build_storyteller_prompt(repo, tree or [], request.instructions, readme)
    content = await generate_narrative(ctx.llm_api_key, prompt, ctx.llm_provider)
    return GenerationResponse(content=content)


@router.post("/{name}/social", response_model=GenerationResponse)
async def generate_social_post(name: str, request: GenerationRequest):
    orch, repo = await _require_repo(name)
    ctx = orch.context
    readme = await orch.github.read_readme(ctx.github_token, ctx.account, name)

    prompt = build_social_prompt(repo, request.post_type, request.instructions, readme)
    content = await generate_narrative(ctx.llm_api_key, prompt, ctx.llm_provider)
    return GenerationResponse(content=content)


@router.post("/{name}/readme", response_model=SuccessResponse)
async def commit_readme(name: str, request: ReadmeCommitRequest):
    """Commit generated text as the repository README."""
    orch, _ = await _require_repo(name)
    ctx = orch.context
    try:
        await orch.github.write_file(
            ctx.github_token,
            ctx.account,
            name,
            README_PATH,
            request.content,
            request.message or DEFAULT_COMMIT_MESSAGE,
        )
    except AuthError as e:
        raise HTTPException(status_code=401, detail=f"GitHub token required in Settings: {e}")
    except GitBrandError as e:
        logger.error(f"Commit failed: {e}")
        return SuccessResponse(success=False, message=f"Commit failed: {e}")

    return SuccessResponse(success=True, message=f"Successfully committed README to {name}! 🚀")
