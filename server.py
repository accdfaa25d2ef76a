"""
FastAPI 기반 My GPT 채팅 서버
=========================
Author: Jin
Date: 2026.03.02
Version: 3.0

Description:
채팅 페이지(GET /)와 질문 API(POST /api/message)를 제공하는 서버입니다.
질문은 AnswerService로 전달되고, 클라이언트 연결이 끊기면 진행 중인 답변 작업은 취소됩니다.
"""
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import asyncio
from typing import Any, Awaitable, Optional

from factories.service_factory import ServiceFactory
from models.answer_model import AnswerMode, MessageRequest, MessageResponse
from services.answer.answer_service import AnswerService
from config.settings import Settings, settings as default_settings
from config.logging_config import logger

# 클라이언트가 먼저 연결을 끊은 요청 (nginx 관례)
CLIENT_CLOSED_REQUEST = 499

# HTML 템플릿
HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>My GPT</title>
    <style>
        * { box-sizing: border-box; }
        body {
            margin: 0;
            font-family: -apple-system, "Segoe UI", Helvetica, sans-serif;
            background: #343541;
            color: #ececf1;
        }
        .chat {
            display: flex;
            flex-direction: column;
            height: 100vh;
            max-width: 760px;
            margin: 0 auto;
        }
        header {
            padding: 16px;
            font-size: 20px;
            font-weight: 600;
            text-align: center;
            border-bottom: 1px solid #4d4d4f;
        }
        #messages {
            flex: 1;
            overflow-y: auto;
            padding: 16px;
        }
        .message {
            padding: 12px 16px;
            margin: 10px 0;
            border-radius: 6px;
            line-height: 1.5;
            white-space: pre-wrap;
        }
        .user { background: #40414f; margin-left: 20%; }
        .bot { background: #444654; margin-right: 20%; }
        .error { background: #5c2b2b; color: #ffd7d7; }
        .composer {
            display: flex;
            gap: 8px;
            padding: 16px;
            border-top: 1px solid #4d4d4f;
        }
        .composer input, .composer select, .composer button {
            font-size: 15px;
            padding: 10px 12px;
            border-radius: 6px;
            border: 1px solid #565869;
            background: #40414f;
            color: inherit;
        }
        .composer input { flex: 1; }
        .composer button { background: #10a37f; border-color: #10a37f; cursor: pointer; }
        .composer button:disabled { opacity: 0.5; cursor: wait; }
    </style>
</head>
<body>
    <div class="chat">
        <header>My GPT</header>

        <div id="messages"></div>

        <form id="composer" class="composer">
            <input id="question" name="question" placeholder="Ask me anything..." autocomplete="off" required />
            <select id="mode" name="mode">
                {{MODE_OPTIONS}}
            </select>
            <button type="submit" id="sendButton">Send</button>
        </form>
    </div>

    <script>
        const form = document.getElementById('composer');
        const questionInput = document.getElementById('question');
        const modeSelect = document.getElementById('mode');
        const sendButton = document.getElementById('sendButton');
        const messages = document.getElementById('messages');

        function addMessage(text, kind) {
            const div = document.createElement('div');
            div.className = 'message ' + kind;
            div.textContent = text;
            messages.appendChild(div);
            messages.scrollTop = messages.scrollHeight;
        }

        form.addEventListener('submit', async (e) => {
            e.preventDefault();

            const question = questionInput.value.trim();
            if (!question) {
                return;
            }

            addMessage(question, 'user');
            questionInput.value = '';
            sendButton.disabled = true;

            try {
                const response = await fetch('/api/message', {
                    method: 'POST',
                    headers: {
                        'Content-Type': 'application/json',
                    },
                    body: JSON.stringify({question: question, mode: modeSelect.value})
                });

                const data = await response.json();

                if (response.ok) {
                    addMessage(data.answer, 'bot');
                } else {
                    addMessage('Error: ' + JSON.stringify(data.detail), 'error');
                }
            } catch (error) {
                addMessage('Error: ' + error.message, 'error');
            } finally {
                sendButton.disabled = false;
                questionInput.focus();
            }
        });
    </script>
</body>
</html>
"""


async def run_until_disconnected(
    request: Request,
    awaitable: Awaitable[Any],
    poll_interval: float = 0.5
) -> Any:
    """
    클라이언트 연결이 유지되는 동안 작업 실행

    연결이 끊기면 작업을 취소하고 499 응답으로 끝냅니다.

    Args:
        request: 현재 HTTP 요청
        awaitable: 실행할 답변 작업
        poll_interval: 연결 확인 주기(초)

    Returns:
        작업 결과

    Raises:
        HTTPException: 클라이언트 연결이 끊긴 경우 (499)
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("[Server] 클라이언트 연결 끊김 - 답변 작업 취소")
                task.cancel()
                raise HTTPException(status_code=CLIENT_CLOSED_REQUEST, detail="Client closed request")
    finally:
        if not task.done():
            task.cancel()


def create_app(
    answer_service: Optional[AnswerService] = None,
    app_settings: Optional[Settings] = None
) -> FastAPI:
    """
    FastAPI 앱 생성

    Args:
        answer_service: 미리 조립된 서비스 (None이면 시작 시 설정으로 조립)
        app_settings: 사용할 설정 (None이면 전역 설정)

    Returns:
        FastAPI 앱
    """
    config = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """서버 시작/종료 시 실행되는 lifespan 이벤트 핸들러"""
        owns_service = app.state.answer_service is None

        # Startup
        if owns_service:
            logger.info("서버 시작 - 설정 검증 및 서비스 조립 중...")
            config.validate()
            app.state.answer_service = await ServiceFactory(config).create_answer_service()
            logger.info("✅ 서비스 준비 완료")

        yield  # 여기서 서버 실행

        # Shutdown
        if owns_service:
            await app.state.answer_service.close()
        logger.info("서버 종료")

    app = FastAPI(
        title="My GPT API",
        description="LLM 기반 질의응답 채팅 서버",
        version="3.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.answer_service = answer_service

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"[Server] 처리되지 않은 오류 ({request.url.path}): {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """채팅 페이지"""
        service: AnswerService = app.state.answer_service
        default_mode = service.default_mode if service else AnswerMode(config.answer_mode)

        mode_options = ""
        for mode in AnswerMode:
            selected = " selected" if mode == default_mode else ""
            mode_options += f'<option value="{mode.value}"{selected}>{mode.value}</option>\n'

        return HTML_TEMPLATE.replace("{{MODE_OPTIONS}}", mode_options)

    @app.post("/api/message", response_model=MessageResponse)
    async def post_message(body: MessageRequest, request: Request):
        """질문을 받아 답변 반환"""
        service: AnswerService = app.state.answer_service
        if service is None:
            raise HTTPException(status_code=503, detail="Service not ready")

        answer = await run_until_disconnected(request, service.answer(body.question, body.mode))
        return MessageResponse(answer=answer)

    @app.get("/health")
    async def health_check():
        """헬스 체크"""
        service: AnswerService = app.state.answer_service
        if service is None:
            return JSONResponse({"status": "starting"}, status_code=503)

        return JSONResponse({
            "status": "healthy",
            "provider": service.llm.provider,
            "model": service.llm.model_name,
            "tools": service.registry.get_all_tool_names(),
            "corpus_chunks": getattr(service.retriever, "document_count", 0)
        })

    return app


app = create_app()


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser()
    parser.add_argument('--host', default=default_settings.host)
    parser.add_argument('--port', type=int, default=default_settings.port)
    args = parser.parse_args()

    uvicorn.run(app, host=args.host, port=args.port)
