from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from exams.models import Exam, Question

User = get_user_model()


class QuestionBankTestMixin:
    def setUp(self):
        self.admin = User.objects.create_user(
            username="admin", email="admin@test.com", password="pass1234", role=User.Role.ADMIN
        )
        self.faculty = User.objects.create_user(
            username="faculty", email="faculty@test.com", password="pass1234",
            role=User.Role.FACULTY, created_by=self.admin,
        )
        self.learner = User.objects.create_user(
            username="learner", email="learner@test.com", password="pass1234",
            role=User.Role.LEARNER, created_by=self.admin,
        )
        self.exam = Exam.objects.create(created_by=self.admin, title="Biology", is_published=True)
        self.client.force_authenticate(self.admin)

    def create_question(self, **payload):
        data = {"exam": self.exam.id, "text": "Question?"}
        data.update(payload)
        return self.client.post(reverse('questions-list'), data, format='json')


class QuestionValidationTestCase(QuestionBankTestMixin, APITestCase):
    def test_mcq_needs_single_label_or_set(self):
        response = self.create_question(question_type="MCQ")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Provide correct_option or correct_options_csv for MCQ"})

        self.assertEqual(self.create_question(question_type="MCQ", correct_option="B").status_code,
                         status.HTTP_201_CREATED)
        self.assertEqual(self.create_question(question_type="MCQ", correct_options_csv="A,B").status_code,
                         status.HTTP_201_CREATED)

    def test_maq_requires_set_and_forbids_single_label(self):
        response = self.create_question(question_type="MAQ", correct_option="A")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.create_question(question_type="MAQ", correct_options_csv="A,C", correct_option="A")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Do not set correct_option", response.data['error'])

        response = self.create_question(question_type="MAQ", correct_options_csv="A,C")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_fill_blank_requires_expected_answer(self):
        response = self.create_question(question_type="FILL_BLANK", correct_answer="   ")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.create_question(question_type="FILL_BLANK", correct_answer="mitochondria")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_question_type_is_required(self):
        response = self.create_question(correct_option="A")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data['error'].startswith("question_type"))

    def test_marks_defaults(self):
        response = self.create_question(question_type="MCQ", correct_option="A", marks=0, negative_marks=-2)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['marks'], 1)
        self.assertEqual(response.data['negative_marks'], 0)

    def test_partial_update_keeps_answer_key_valid(self):
        question = Question.objects.create(
            exam=self.exam, text="?", question_type=Question.QuestionType.MCQ, correct_option="A"
        )
        url = reverse('questions-detail', args=[question.id])

        response = self.client.patch(url, {"question_type": "MAQ"}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.patch(url, {"text": "Updated?"}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class TotalMarksTestCase(QuestionBankTestMixin, APITestCase):
    def test_total_marks_follow_question_changes(self):
        first = self.create_question(question_type="MCQ", correct_option="A", marks=3).data
        self.create_question(question_type="FILL_BLANK", correct_answer="x", marks=2)
        self.exam.refresh_from_db()
        self.assertEqual(self.exam.total_marks, 5)

        self.client.patch(reverse('questions-detail', args=[first['id']]), {"marks": 4}, format='json')
        self.exam.refresh_from_db()
        self.assertEqual(self.exam.total_marks, 6)

        self.client.delete(reverse('questions-detail', args=[first['id']]))
        self.exam.refresh_from_db()
        self.assertEqual(self.exam.total_marks, 2)

    def test_total_marks_not_writable(self):
        response = self.client.patch(reverse('tests-detail', args=[self.exam.id]), {"total_marks": 99}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.exam.refresh_from_db()
        self.assertEqual(self.exam.total_marks, 0)


class QuestionAccessTestCase(QuestionBankTestMixin, APITestCase):
    def test_faculty_of_same_tenant_can_add_questions(self):
        self.client.force_authenticate(self.faculty)
        response = self.create_question(question_type="MCQ", correct_option="A")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_other_tenant_cannot_add_questions(self):
        stranger = User.objects.create_user(
            username="stranger", email="stranger@test.com", password="pass1234", role=User.Role.ADMIN
        )
        self.client.force_authenticate(stranger)
        response = self.create_question(question_type="MCQ", correct_option="A")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_learner_cannot_write_and_never_sees_keys(self):
        Question.objects.create(exam=self.exam, text="?", question_type=Question.QuestionType.MCQ, correct_option="A")
        self.client.force_authenticate(self.learner)

        response = self.create_question(question_type="MCQ", correct_option="A")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.get(reverse('questions-list'), {"exam_id": self.exam.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertNotIn('correct_option', response.data[0])

    def test_learner_cannot_list_unpublished_questions(self):
        Exam.objects.filter(pk=self.exam.pk).update(is_published=False)
        Question.objects.create(exam=self.exam, text="?", question_type=Question.QuestionType.MCQ, correct_option="A")
        self.client.force_authenticate(self.learner)
        response = self.client.get(reverse('questions-list'), {"exam_id": self.exam.id})
        self.assertEqual(response.data, [])


class BulkUploadTestCase(QuestionBankTestMixin, APITestCase):
    def upload(self, content):
        upload = SimpleUploadedFile("questions.csv", content.encode('utf-8'), content_type='text/csv')
        return self.client.post(reverse('questions-bulk-upload'), {"exam": self.exam.id, "file": upload},
                                format='multipart')

    def test_valid_rows_are_created(self):
        response = self.upload(
            "text,question_type,option_a,option_b,correct_option,correct_options_csv,correct_answer,marks\n"
            "2+2?,MCQ,3,4,B,,,2\n"
            "Primes?,maq,2,4,,A,,\n"
            "H2O is?,FILL_BLANK,,,,,water,\n"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.exam.questions.count(), 3)
        self.exam.refresh_from_db()
        self.assertEqual(self.exam.total_marks, 4)

    def test_invalid_row_rolls_back_everything(self):
        response = self.upload(
            "text,question_type,correct_option,correct_answer\n"
            "Ok?,MCQ,A,\n"
            "Broken?,FILL_BLANK,,\n"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data['error'].startswith("Row 3"))
        self.assertEqual(self.exam.questions.count(), 0)

    def test_field_errors_carry_row_number(self):
        response = self.upload(
            "text,question_type,correct_option,marks\n"
            "Q1,MCQ,A,1\n"
            "Q2,MCQ,A,abc\n"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], "Row 3: marks: A valid integer is required.")
        self.assertEqual(self.exam.questions.count(), 0)

    def test_unknown_question_type_carries_row_number(self):
        response = self.upload(
            "text,question_type,correct_option\n"
            "Q1,ESSAY,A\n"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data['error'].startswith("Row 2: question_type:"))

    def test_missing_file(self):
        response = self.client.post(reverse('questions-bulk-upload'), {"exam": self.exam.id}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "No file uploaded"})


class QuestionModelTestCase(TestCase):
    def test_deleting_question_recalculates_directly(self):
        admin = User.objects.create_user(username="a", email="a@test.com", password="pass1234", role=User.Role.ADMIN)
        exam = Exam.objects.create(created_by=admin, title="T")
        question = Question.objects.create(exam=exam, text="?", question_type="MCQ", correct_option="A", marks=5)
        exam.refresh_from_db()
        self.assertEqual(exam.total_marks, 5)

        question.delete()
        exam.refresh_from_db()
        self.assertEqual(exam.total_marks, 0)
