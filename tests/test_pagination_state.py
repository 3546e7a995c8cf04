"""Tests for the client-side pagination state."""

import math

from django.test import SimpleTestCase

from quezi_core.core.application.services.pagination_state import PaginationState


class PaginationScenarioTests(SimpleTestCase):
    def test_twenty_five_items_make_three_pages(self) -> None:
        state = PaginationState(1, 10)
        state.set_total_items(25)

        self.assertEqual(state.total_pages, 3)
        self.assertTrue(state.has_next_page)
        self.assertFalse(state.has_previous_page)

        state.go_to_page(3)
        self.assertEqual(state.start_index, 20)
        self.assertEqual(state.end_index, 25)
        self.assertFalse(state.has_next_page)
        self.assertTrue(state.has_previous_page)

    def test_short_collection_fits_in_one_page(self) -> None:
        state = PaginationState(1, 10)
        state.set_total_items(5)
        self.assertEqual(state.total_pages, 1)
        self.assertEqual(state.end_index, 5)

    def test_next_at_last_page_and_previous_at_first_are_noops(self) -> None:
        state = PaginationState(1, 10)
        state.set_total_items(20)

        state.previous_page()
        self.assertEqual(state.current_page, 1)

        state.next_page()
        self.assertEqual(state.current_page, 2)
        state.next_page()
        self.assertEqual(state.current_page, 2)

    def test_navigation_is_ignored_without_items(self) -> None:
        state = PaginationState()
        self.assertEqual(state.total_pages, 0)
        state.go_to_page(1)
        state.next_page()
        self.assertEqual(state.current_page, 1)
        self.assertEqual(state.end_index, 0)

    def test_as_params_matches_fetch_contract(self) -> None:
        state = PaginationState(1, 20)
        state.set_total_items(100)
        state.go_to_page(4)
        self.assertEqual(state.as_params(), {"page": 4, "limit": 20})

    def test_window_slices_current_page(self) -> None:
        items = list(range(25))
        state = PaginationState(1, 10)
        state.set_total_items(len(items))
        state.go_to_page(3)
        self.assertEqual(state.window.slice(items), [20, 21, 22, 23, 24])

    def test_page_beyond_total_yields_empty_window(self) -> None:
        state = PaginationState(2, 5)
        self.assertEqual(state.start_index, 5)
        self.assertEqual(state.end_index, 0)
        self.assertEqual(state.window.slice(list(range(10))), [])

        state.set_total_items(7)
        self.assertEqual(state.window.slice(list(range(7))), [5, 6])

    def test_shrinking_total_keeps_current_page(self) -> None:
        state = PaginationState(1, 10)
        state.set_total_items(25)
        state.go_to_page(3)

        state.set_total_items(12)

        self.assertEqual(state.current_page, 3)
        self.assertEqual(state.start_index, 20)
        self.assertEqual(state.end_index, 12)
        self.assertEqual(state.window.slice(list(range(12))), [])


class PaginationPropertyTests(SimpleTestCase):
    def test_total_pages_is_ceiling_of_items_over_size(self) -> None:
        for size in (1, 3, 10, 25):
            for n in (0, 1, 9, 10, 11, 99, 100, 101):
                with self.subTest(n=n, size=size):
                    state = PaginationState(1, size)
                    state.set_total_items(n)
                    self.assertEqual(state.total_pages, math.ceil(n / size))
                    self.assertEqual(state.total_pages == 0, n == 0)

    def test_window_bounds_hold_on_every_page(self) -> None:
        for size in (1, 4, 10):
            for n in (1, 7, 30, 41):
                state = PaginationState(1, size)
                state.set_total_items(n)
                for page in range(1, state.total_pages + 1):
                    state.go_to_page(page)
                    with self.subTest(n=n, size=size, page=page):
                        self.assertEqual(state.start_index, (page - 1) * size)
                        self.assertGreaterEqual(state.end_index - state.start_index, 0)
                        self.assertLessEqual(state.end_index - state.start_index, size)

    def test_go_to_page_outside_range_keeps_current_page(self) -> None:
        state = PaginationState(1, 10)
        state.set_total_items(30)
        state.go_to_page(2)
        for page in (-1, 0, 4, 100):
            with self.subTest(page=page):
                state.go_to_page(page)
                self.assertEqual(state.current_page, 2)

    def test_set_page_size_always_returns_to_first_page(self) -> None:
        state = PaginationState(1, 10)
        state.set_total_items(100)
        state.go_to_page(7)
        state.set_page_size(25)
        self.assertEqual(state.current_page, 1)
        self.assertEqual(state.page_size, 25)
        self.assertEqual(state.total_pages, 4)

    def test_non_positive_page_size_is_ignored(self) -> None:
        state = PaginationState(1, 10)
        state.set_total_items(50)
        state.go_to_page(3)
        state.set_page_size(0)
        state.set_page_size(-5)
        self.assertEqual(state.page_size, 10)
        self.assertEqual(state.current_page, 3)

    def test_negative_total_is_clamped_to_zero(self) -> None:
        state = PaginationState()
        state.set_total_items(-3)
        self.assertEqual(state.total_items, 0)
        self.assertEqual(state.total_pages, 0)

    def test_reset_restores_construction_values(self) -> None:
        state = PaginationState(2, 5)
        state.set_total_items(50)
        state.go_to_page(6)
        state.set_page_size(20)
        state.reset()
        self.assertEqual(state.current_page, 2)
        self.assertEqual(state.page_size, 5)
        self.assertEqual(state.total_items, 0)
