"""Move generation: piece geometry, the legality filter and perft counts."""

import pytest

from tinychess.core.enums import Color, PieceType
from tinychess.core.errors import NoPieceAtPosition
from tinychess.core.game import Game
from tinychess.core.move import Move
from tinychess.core.move_generator import MoveGenerator
from tinychess.core.piece import Piece
from tinychess.core.types import (
    A1, A2, A3, A8, B1, B2, B8, C1, C4, C6, D1, D2, D4, D5, D6,
    E1, E2, E3, E4, E5, E6, E7, E8, F1, F3, F4, F5, F6, F8,
    G1, G5, G8, H1, H2, H3, H5, H6, H8,
)

W, B = Color.WHITE, Color.BLACK


def mv(color: Color, piece_type: PieceType) -> Piece:
    """A piece that has already moved."""
    return Piece(color, piece_type, has_moved=True)


def perft(game: Game, depth: int) -> int:
    """Count leaf nodes at *depth* by simulating on copies."""
    if depth == 0:
        return 1
    nodes = 0
    for sq, moves in MoveGenerator(game).all_legal_moves().items():
        if depth == 1:
            nodes += len(moves)
            continue
        for move in moves:
            child = game.copy()
            child.make_move(sq, move.destination, move, simulation=True)
            nodes += perft(child, depth - 1)
    return nodes


def destinations(moves: list[Move]) -> list:
    return [m.destination for m in moves]


# ── Starting position ────────────────────────────────────────────────────────


class TestStartingPosition:
    def test_twenty_moves(self, game: Game) -> None:
        gen = MoveGenerator(game)
        total = sum(len(gen.legal_moves(sq)) for sq in game.board.pieces(W))
        assert total == 20

    def test_pieces_with_moves_in_scan_order(self, game: Game) -> None:
        moves = MoveGenerator(game).all_legal_moves()
        rank_two = [sq for sq in game.board.squares() if sq.rank == 6]
        assert list(moves) == [*rank_two, B1, G1]

    def test_pawn_single_and_double(self, game: Game) -> None:
        assert MoveGenerator(game).legal_moves(E2) == [Move(E3), Move(E4)]

    def test_knight(self, game: Game) -> None:
        assert MoveGenerator(game).legal_moves(G1) == [Move(F3), Move(H3)]

    def test_boxed_in_pieces(self, game: Game) -> None:
        gen = MoveGenerator(game)
        for sq in (A1, C1, D1, E1, F1, H1):
            assert gen.legal_moves(sq) == []

    def test_opponent_pieces_have_no_moves(self, game: Game) -> None:
        gen = MoveGenerator(game)
        assert gen.legal_moves(E7) == []
        assert gen.pseudo_legal_moves(E7) == []

    def test_empty_square_raises(self, game: Game) -> None:
        gen = MoveGenerator(game)
        with pytest.raises(NoPieceAtPosition):
            gen.legal_moves(E4)
        with pytest.raises(NoPieceAtPosition):
            gen.pseudo_legal_moves(E4)

    def test_repeatable(self, game: Game) -> None:
        gen = MoveGenerator(game)
        assert gen.all_legal_moves() == MoveGenerator(game.copy()).all_legal_moves()


# ── Pawns ────────────────────────────────────────────────────────────────────


class TestPawn:
    KINGS = {H1: mv(W, PieceType.KING), H8: mv(B, PieceType.KING)}

    def test_blocked(self, setup_game) -> None:
        game = setup_game(
            {**self.KINGS, E2: Piece(W, PieceType.PAWN), E3: mv(B, PieceType.KNIGHT)}
        )
        assert MoveGenerator(game).legal_moves(E2) == []

    def test_double_step_blocked(self, setup_game) -> None:
        game = setup_game(
            {**self.KINGS, E2: Piece(W, PieceType.PAWN), E4: mv(B, PieceType.KNIGHT)}
        )
        assert MoveGenerator(game).legal_moves(E2) == [Move(E3)]

    def test_no_double_step_after_moving(self, setup_game) -> None:
        game = setup_game({**self.KINGS, E3: mv(W, PieceType.PAWN)})
        assert MoveGenerator(game).legal_moves(E3) == [Move(E4)]

    def test_black_moves_down_the_board(self, setup_game) -> None:
        game = setup_game({**self.KINGS, E7: Piece(B, PieceType.PAWN)}, B)
        assert MoveGenerator(game).legal_moves(E7) == [Move(E6), Move(E5)]

    def test_diagonal_captures(self, setup_game) -> None:
        game = setup_game(
            {
                **self.KINGS,
                E4: mv(W, PieceType.PAWN),
                D5: mv(B, PieceType.PAWN),
                E5: mv(B, PieceType.PAWN),
                F5: mv(B, PieceType.PAWN),
            }
        )
        assert MoveGenerator(game).legal_moves(E4) == [
            Move(D5, captured=D5),
            Move(F5, captured=F5),
        ]

    def test_no_capture_of_own_piece(self, setup_game) -> None:
        game = setup_game(
            {**self.KINGS, E4: mv(W, PieceType.PAWN), D5: mv(W, PieceType.KNIGHT)}
        )
        assert MoveGenerator(game).legal_moves(E4) == [Move(E5)]

    def _en_passant_game(self, setup_game, *, double_moved=True, last_moved=D5):
        return setup_game(
            {
                **self.KINGS,
                E5: mv(W, PieceType.PAWN),
                D5: Piece(B, PieceType.PAWN, True, double_moved),
            },
            last_moved=last_moved,
        )

    def test_en_passant(self, setup_game) -> None:
        game = self._en_passant_game(setup_game)
        moves = MoveGenerator(game).legal_moves(E5)
        assert moves == [Move(E6), Move(D6, captured=D5)]
        assert moves[1].is_en_passant

    def test_en_passant_needs_last_moved(self, setup_game) -> None:
        game = self._en_passant_game(setup_game, last_moved=None)
        assert MoveGenerator(game).legal_moves(E5) == [Move(E6)]

    def test_en_passant_needs_double_step_flag(self, setup_game) -> None:
        game = self._en_passant_game(setup_game, double_moved=False)
        assert MoveGenerator(game).legal_moves(E5) == [Move(E6)]


# ── Pieces ───────────────────────────────────────────────────────────────────


class TestPieces:
    def test_rook_rays_stop_on_pieces(self, setup_game) -> None:
        game = setup_game(
            {
                A1: mv(W, PieceType.ROOK),
                A3: mv(W, PieceType.PAWN),
                D1: mv(B, PieceType.KNIGHT),
                H3: mv(W, PieceType.KING),
                H6: mv(B, PieceType.KING),
            }
        )
        assert MoveGenerator(game).legal_moves(A1) == [
            Move(B1),
            Move(C1),
            Move(D1, captured=D1),
            Move(A2),
        ]

    def test_queen_on_open_board(self, setup_game) -> None:
        game = setup_game(
            {D4: mv(W, PieceType.QUEEN), H2: mv(W, PieceType.KING), B8: mv(B, PieceType.KING)}
        )
        assert len(MoveGenerator(game).legal_moves(D4)) == 27

    def test_bishop_diagonals(self, setup_game) -> None:
        game = setup_game(
            {C1: mv(W, PieceType.BISHOP), H1: mv(W, PieceType.KING), A8: mv(B, PieceType.KING)}
        )
        assert set(destinations(MoveGenerator(game).legal_moves(C1))) == {
            B2, A3, D2, E3, F4, G5, H6,
        }

    def test_king_steps(self, setup_game) -> None:
        game = setup_game(
            {E4: mv(W, PieceType.KING), A8: mv(B, PieceType.KING)}
        )
        assert len(MoveGenerator(game).legal_moves(E4)) == 8

    def test_king_cannot_step_into_attack(self, setup_game) -> None:
        game = setup_game(
            {E1: mv(W, PieceType.KING), A2: mv(B, PieceType.ROOK), H8: mv(B, PieceType.KING)}
        )
        # Rank 2 is covered by the rook
        assert set(destinations(MoveGenerator(game).legal_moves(E1))) == {D1, F1}


# ── Legality filter ──────────────────────────────────────────────────────────


class TestLegality:
    def test_pinned_piece(self, setup_game) -> None:
        game = setup_game(
            {
                E1: mv(W, PieceType.KING),
                E2: mv(W, PieceType.BISHOP),
                E8: mv(B, PieceType.ROOK),
                A8: mv(B, PieceType.KING),
            }
        )
        gen = MoveGenerator(game)
        assert gen.pseudo_legal_moves(E2)
        assert gen.legal_moves(E2) == []

    def test_must_answer_check(self, setup_game) -> None:
        game = setup_game(
            {
                E1: mv(W, PieceType.KING),
                A3: mv(W, PieceType.ROOK),
                E8: mv(B, PieceType.ROOK),
                H8: mv(B, PieceType.KING),
            }
        )
        gen = MoveGenerator(game)
        assert gen.is_in_check(W)
        assert gen.legal_moves(A3) == [Move(E3)]

    def test_filter_does_not_mutate_game(self, game: Game) -> None:
        before = game.copy()
        MoveGenerator(game).all_legal_moves()
        assert game.board == before.board
        assert game.turn == before.turn
        assert game.last_moved == before.last_moved

    def test_no_move_leaves_own_king_attacked(self, game: Game, play) -> None:
        line = [(E2, E4), (E7, E5), (D1, H5), (B8, C6), (F1, C4), (G8, F6)]
        for step in [None, *line]:
            if step is not None:
                play(game, step)
            mover = game.turn
            for sq, moves in MoveGenerator(game).all_legal_moves().items():
                for move in moves:
                    child = game.copy()
                    child.make_move(sq, move.destination, move, simulation=True)
                    assert not MoveGenerator(child).is_in_check(mover), (sq, move)

    def test_finished_game_has_no_moves(self, game: Game) -> None:
        game.checkmate = True
        gen = MoveGenerator(game)
        assert gen.legal_moves(E2) == []
        assert gen.pseudo_legal_moves(E2) == []
        assert not gen.has_legal_moves()


# ── Castling ─────────────────────────────────────────────────────────────────


class TestCastling:
    def _game(self, setup_game, extra=None):
        pieces = {
            E1: Piece(W, PieceType.KING),
            A1: Piece(W, PieceType.ROOK),
            H1: Piece(W, PieceType.ROOK),
            E8: mv(B, PieceType.KING),
        }
        pieces.update(extra or {})
        return setup_game(pieces)

    @staticmethod
    def _castles(game: Game) -> list[Move]:
        return [m for m in MoveGenerator(game).legal_moves(E1) if m.is_castle]

    def test_both_sides(self, setup_game) -> None:
        castles = self._castles(self._game(setup_game))
        assert castles == [
            Move(G1, castle_rook_from=H1, castle_rook_to=F1),
            Move(C1, castle_rook_from=A1, castle_rook_to=D1),
        ]

    def test_blocked_queenside(self, setup_game) -> None:
        game = self._game(setup_game, {B1: Piece(W, PieceType.KNIGHT)})
        assert destinations(self._castles(game)) == [G1]

    def test_moved_rook(self, setup_game) -> None:
        game = self._game(setup_game, {H1: mv(W, PieceType.ROOK)})
        assert destinations(self._castles(game)) == [C1]

    def test_moved_king(self, setup_game) -> None:
        game = self._game(setup_game, {E1: mv(W, PieceType.KING)})
        assert self._castles(game) == []

    def test_not_through_attacked_square(self, setup_game) -> None:
        game = self._game(setup_game, {F8: mv(B, PieceType.ROOK)})
        assert destinations(self._castles(game)) == [C1]

    def test_not_into_check(self, setup_game) -> None:
        game = self._game(setup_game, {G8: mv(B, PieceType.ROOK)})
        assert destinations(self._castles(game)) == [C1]

    def test_not_out_of_check(self, setup_game) -> None:
        game = self._game(setup_game, {E5: mv(B, PieceType.ROOK)})
        assert self._castles(game) == []

    def test_enemy_rook_in_corner_does_not_count(self, setup_game) -> None:
        game = self._game(setup_game, {H1: Piece(B, PieceType.ROOK)})
        pseudo = MoveGenerator(game).pseudo_legal_moves(E1)
        assert [m.destination for m in pseudo if m.is_castle] == [C1]


# ── Perft ────────────────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self, game: Game) -> None:
        assert perft(game, 1) == 20

    def test_depth_2(self, game: Game) -> None:
        assert perft(game, 2) == 400

    @pytest.mark.slow
    def test_depth_3(self, game: Game) -> None:
        assert perft(game, 3) == 8_902
