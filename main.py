"""
My GPT CLI
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
AnswerService와 터미널에서 상호작용하는 인터페이스입니다.
--question을 주면 한 번 답하고 종료하며, 없으면 대화 루프를 시작합니다.
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from factories.service_factory import ServiceFactory
from models.answer_model import AnswerMode
from services.answer.answer_service import AnswerService
from config.settings import settings
from config.logging_config import logger


def print_header():
    """헤더 출력"""
    print("\n" + "=" * 70)
    print("My GPT")
    print("=" * 70 + "\n")


def print_section(title: str):
    """섹션 헤더 출력"""
    print(f"\n{'─' * 70}")
    print(f"  {title}")
    print(f"{'─' * 70}\n")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="My GPT terminal chat")
    parser.add_argument('--question', '-q', help="한 번만 질문하고 종료")
    parser.add_argument(
        '--mode', '-m',
        choices=[mode.value for mode in AnswerMode],
        default=None,
        help="답변 모드 (기본값: ANSWER_MODE 설정)"
    )
    return parser.parse_args(argv)


async def chat_loop(service: AnswerService, mode: Optional[AnswerMode] = None):
    """대화 루프"""
    print_section("대화 시작")
    print(f"모드: {(mode or service.default_mode).value}")
    print("   종료하려면 'quit', 'exit', 'q'를 입력하세요.\n")

    while True:
        try:
            user_input = input("\nYou: ").strip()

            if user_input.lower() in ['quit', 'exit', 'q']:
                print("\n종료합니다. 감사합니다!")
                break

            if not user_input:
                continue

            print("\nMy GPT: (처리 중...)")
            answer = await service.answer(user_input, mode)
            print(f"\n{answer}\n")

        except (KeyboardInterrupt, EOFError):
            print("\n\n종료합니다. 감사합니다!")
            break


async def main(argv: Optional[List[str]] = None):
    """메인 함수"""
    args = parse_args(argv)
    mode = AnswerMode(args.mode) if args.mode else None

    service: Optional[AnswerService] = None
    try:
        settings.validate()
        service = await ServiceFactory(settings).create_answer_service()

        if args.question:
            print(await service.answer(args.question, mode))
        else:
            print_header()
            await chat_loop(service, mode)

    except KeyboardInterrupt:
        print("\n\n프로그램을 종료합니다.")
    except Exception as e:
        print(f"\n오류 발생: {str(e)}")
        logger.error(f"메인 오류: {str(e)}", exc_info=True)
        sys.exit(1)
    finally:
        if service is not None:
            await service.close()


if __name__ == "__main__":
    asyncio.run(main())
